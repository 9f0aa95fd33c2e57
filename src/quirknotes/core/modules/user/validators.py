from quirknotes.errors import ValidationError


def validate_credentials(username: str | None, password: str | None, action: str) -> tuple[str, str]:
    """Validate that both credentials were supplied.

    Args:
        username: Submitted username
        password: Submitted password
        action: Verb used in the error message ("register" or "login")

    Returns:
        The username and password, both non-empty

    Raises:
        ValidationError: If either value is missing or empty
    """
    if not username or not password:
        raise ValidationError(f"Username and password both needed to {action}.")
    return username, password
