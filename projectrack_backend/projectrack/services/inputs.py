from ..errors import ValidationError


def text(value, label):
    """Request values stored or matched as text must be strings; None means absent."""
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"{label} must be a string.")


def stripped(value, label):
    return (text(value, label) or '').strip()


def as_mapping(data):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data
