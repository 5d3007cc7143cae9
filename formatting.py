BYTE_UNITS = ('Bytes', 'KB', 'MB', 'GB')


def _trim(value: float) -> str:
    return f'{value:.2f}'.rstrip('0').rstrip('.')


def format_bytes(num_bytes: float) -> str:
    if num_bytes == 0:
        return '0 Bytes'
    value, i = float(num_bytes), 0
    while value >= 1024 and i < len(BYTE_UNITS) - 1:
        value /= 1024
        i += 1
    return f'{_trim(value)} {BYTE_UNITS[i]}'


def format_emissions(grams: float) -> str:
    if grams < 0.001:
        return f'{grams * 1_000_000:.2f} μg CO₂'
    if grams < 1:
        return f'{grams * 1000:.2f} mg CO₂'
    if grams < 1000:
        return f'{grams:.2f} g CO₂'
    return f'{grams / 1000:.2f} kg CO₂'
