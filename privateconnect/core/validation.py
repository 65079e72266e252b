"""Client-side validation of the login form."""

import re
from typing import Any, Dict, Mapping, Union
from privateconnect.models.auth import Credentials

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate(credentials: Union[Credentials, Mapping[str, Any]]) -> Dict[str, str]:
    """
    Check the raw form fields and return a mapping of field name to message.

    Every rule is applied, so several fields can be reported at once. An empty
    mapping means the form is valid.
    """
    if isinstance(credentials, Credentials):
        email, password = credentials.email, credentials.password
    else:
        email = credentials.get("email") or ""
        password = credentials.get("password") or ""

    errors: Dict[str, str] = {}

    if not email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Invalid email format"

    if not password.strip():
        errors["password"] = "Password is required"

    return errors
