"""Check-digit algorithms for carrier tracking-number formats.

Every function takes the full candidate (payload plus check character) and
returns True when the trailing check digit matches. Malformed input returns
False rather than raising.
"""

# UPU S10 weights for the 8 serial digits
S10_WEIGHTS = (8, 6, 4, 2, 3, 5, 9, 7)

# FedEx Express 12-digit weights, applied left to right over the 11-digit payload
FEDEX_EXPRESS_WEIGHTS = (3, 1, 7)


def _digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def gs1_mod10_check_digit(payload: str) -> int:
    """
    Compute a GS1 modulo-10 check digit.

    Weights alternate 3/1 starting with 3 on the rightmost payload digit.
    Used by SSCC-18, USPS IMpb and the FedEx Ground forms.

    Example: '10614141234567890' -> 8
    """
    total = 0
    for i, char in enumerate(reversed(payload)):
        weight = 3 if i % 2 == 0 else 1
        total += int(char) * weight
    return (10 - total % 10) % 10


def gs1_mod10(number: str) -> bool:
    """Validate a numeric identifier ending in a GS1 mod-10 check digit."""
    if len(number) < 2 or not _digits(number):
        return False
    return gs1_mod10_check_digit(number[:-1]) == int(number[-1])


def ups_char_value(char: str) -> int:
    """
    Map a 1Z payload character to its checksum value.

    Digits keep their value; letters map as A=2, B=3, ... H=9, I=0, J=1, ...
    """
    if char.isdigit():
        return int(char)
    return (ord(char.upper()) - 63) % 10


def ups_1z(number: str) -> bool:
    """
    Validate a UPS 1Z tracking number.

    The 15 characters after '1Z' are summed with odd positions counted once
    and even positions doubled; the check digit brings the total to a
    multiple of ten.

    Example: '1Z999AA10123456784' -> True
    """
    number = number.upper()
    if len(number) != 18 or not number.startswith("1Z"):
        return False
    if not (number.isascii() and number.isalnum() and number[-1].isdigit()):
        return False

    odd_total = 0
    even_total = 0
    for i, char in enumerate(number[2:-1]):
        value = ups_char_value(char)
        if i % 2 == 0:
            odd_total += value
        else:
            even_total += value
    total = odd_total + even_total * 2
    return (10 - total % 10) % 10 == int(number[-1])


def fedex_mod11(number: str) -> bool:
    """
    Validate a 12-digit FedEx Express number.

    Payload digits are weighted 3, 1, 7 repeating from the left; the check
    digit is the weighted sum modulo 11, then modulo 10.

    Example: '986578788855' -> True
    """
    if len(number) != 12 or not _digits(number):
        return False
    total = 0
    for i, char in enumerate(number[:-1]):
        total += int(char) * FEDEX_EXPRESS_WEIGHTS[i % 3]
    return total % 11 % 10 == int(number[-1])


def dhl_mod7(number: str) -> bool:
    """
    Validate a 10-digit DHL Express waybill.

    The check digit is the first nine digits, read as an integer, modulo 7.

    Example: '1234567891' -> True
    """
    if len(number) != 10 or not _digits(number):
        return False
    return int(number[:9]) % 7 == int(number[9])


def s10_check_digit(serial: str) -> int:
    """Compute the UPU S10 check digit for an 8-digit serial."""
    total = sum(int(char) * weight for char, weight in zip(serial, S10_WEIGHTS))
    check = 11 - total % 11
    if check == 10:
        return 0
    if check == 11:
        return 5
    return check


def upu_s10(number: str) -> bool:
    """
    Validate a UPU S10 international item identifier.

    Format: 2 service letters, 8 serial digits, check digit, 2-letter
    country code (e.g. 'EE123456785US').
    """
    number = number.upper()
    if len(number) != 13 or not number.isascii():
        return False
    serial, check = number[2:10], number[10]
    if not (number[:2].isalpha() and number[11:].isalpha()):
        return False
    if not (serial.isdigit() and check.isdigit()):
        return False
    return s10_check_digit(serial) == int(check)
