"""
Polynomial arithmetic in the quotient ring Z_n[X]/(X^r - 1).

A polynomial is a plain list of Python integers where index i holds the
coefficient of X^i. Exponents fold modulo r (X^r = 1), coefficients are
reduced modulo n. Every function here is stateless and returns a fresh list.
"""


def poly_mult(poly1, poly2, n, r):
    """
    Multiply two polynomials in Z_n[X]/(X^r - 1).

    Parameters:
    poly1, poly2 -- coefficient lists (index = degree), any length
    n -- coefficient modulus
    r -- exponent modulus

    Returns a list of exactly r coefficients, each in [0, n).
    """
    result = [0] * r

    for i, a in enumerate(poly1):
        if a == 0:
            continue
        for j, b in enumerate(poly2):
            if b == 0:
                continue
            deg = (i + j) % r
            result[deg] += a * b

    return [c % n for c in result]


def poly_pow(poly, exp, n, r, token=None):
    """
    Raise a polynomial to a non-negative integer power in Z_n[X]/(X^r - 1).

    Binary (square-and-multiply) exponentiation, so only O(log exp) ring
    multiplications are performed. The result is padded to exactly r
    coefficients.

    Parameters:
    poly -- base polynomial
    exp -- non-negative exponent
    n, r -- ring moduli
    token -- optional CancellationToken, checked once per squaring
    """
    if exp < 0:
        raise ValueError(f"Exponent must be non-negative, got {exp}")

    result = [1]
    base = list(poly)

    while exp > 0:
        if token is not None:
            token.check("polynomial exponentiation")
        if exp & 1:
            result = poly_mult(result, base, n, r)
        exp >>= 1
        if exp:
            base = poly_mult(base, base, n, r)

    # Pad missing high-degree slots and reduce (covers exp == 0 and n == 1)
    result = result + [0] * (r - len(result))
    return [c % n for c in result]


def poly_equal(poly1, poly2, n, r):
    """True iff both polynomials agree on every slot below r after reduction mod n."""
    for i in range(r):
        a = poly1[i] if i < len(poly1) else 0
        b = poly2[i] if i < len(poly2) else 0
        if a % n != b % n:
            return False
    return True


def x_plus_a(a, n, r):
    """The polynomial X + a as a ring element of length r."""
    poly = [0] * r
    poly[0] = a % n
    poly[1 % r] = (poly[1 % r] + 1) % n
    return poly


def x_power_plus_a(e, a, n, r):
    """
    The polynomial X^e + a reduced in Z_n[X]/(X^r - 1).

    The exponent folds to e mod r; when it folds to zero the two terms
    share the constant slot.
    """
    poly = [0] * r
    poly[e % r] = 1
    poly[0] = (poly[0] + a) % n
    return [c % n for c in poly]


def poly_to_string(poly):
    """Comma separated coefficients, lowest degree first."""
    return ", ".join(str(c) for c in poly)
