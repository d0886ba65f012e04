"""Random password generation."""

import secrets
import string

_rng = secrets.SystemRandom()


def generate_password(
    length: int = 8,
    min_upper: int = 1,
    min_lower: int = 1,
    min_digit: int = 1,
) -> str:
    """Generate a random password with per-class minimum counts.

    Args:
        length: Total length. Raised to the sum of the minimums if smaller.
        min_upper: Minimum number of uppercase letters.
        min_lower: Minimum number of lowercase letters.
        min_digit: Minimum number of digits.

    Returns:
        A password whose remaining characters are drawn only from the
        classes with a nonzero minimum, shuffled so the required
        characters are not at fixed positions.
    """
    length = max(length, min_upper + min_lower + min_digit)

    chars: list[str] = []
    pool = ""
    for alphabet, minimum in (
        (string.ascii_uppercase, min_upper),
        (string.ascii_lowercase, min_lower),
        (string.digits, min_digit),
    ):
        if minimum > 0:
            pool += alphabet
            chars.extend(_rng.choice(alphabet) for _ in range(minimum))

    if not pool and length > 0:
        raise ValueError("At least one character class needs a nonzero minimum")

    while len(chars) < length:
        chars.append(_rng.choice(pool))

    # Fisher-Yates
    for i in range(len(chars) - 1, 0, -1):
        j = _rng.randrange(i + 1)
        chars[i], chars[j] = chars[j], chars[i]

    return "".join(chars)
