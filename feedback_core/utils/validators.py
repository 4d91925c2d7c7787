from pydantic.types import SecretStr


def validate_password(password: SecretStr) -> SecretStr:
    if len(password.get_secret_value()) <= 2:
        raise ValueError("Password is too short.")
    if not password.get_secret_value().isascii():
        raise ValueError("Password is not ASCII.")
    return password


def validate_form_title(form_title: str) -> str:
    stripped = form_title.strip()
    if len(stripped) == 0:
        raise ValueError("Form title can't be empty.")
    return stripped


def validate_case_insensitive_email(email: str) -> str:
    return email.strip().lower()
