"""Authentication module for loading the GitLab access token.

The OAuth flow that produces the token lives outside this package. This
module only picks the resulting token up from the environment (or a .env
file via python-dotenv) and hands it to the store client, which receives it
explicitly at construction time.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """GitLab API credentials."""
    host: str
    token: str


class Authenticator:
    """Loads and validates the GitLab bearer token from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Required environment variables:
        GITLAB_TOKEN: OAuth or personal access token used as bearer token

    Optional environment variables:
        GITLAB_API: GitLab host (default: https://gitlab.com)

    Example:
        >>> auth = Authenticator()
        >>> client = GitLabClient(host, auth.get_token)
    """

    DEFAULT_HOST = "https://gitlab.com"

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get GitLab credentials from environment variables.

        Returns:
            Credentials: A named tuple containing host and token

        Raises:
            InvalidCredentialsError: If GITLAB_TOKEN is missing
        """
        host = os.getenv('GITLAB_API') or self.DEFAULT_HOST
        token = os.getenv('GITLAB_TOKEN')

        if not token:
            raise InvalidCredentialsError(endpoint=host)

        return Credentials(host=host, token=token)

    def get_token(self) -> str:
        """Token provider callable handed to GitLabClient."""
        return self.get_credentials().token
