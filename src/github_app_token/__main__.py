"""Entry point for ``python -m github_app_token``."""

from github_app_token.cli import main

if __name__ == "__main__":
    main()
