"""Entry point for ``python -m src.asyncapi_prep``."""
from src.asyncapi_prep.cli import app
from src.shared.constants import APP_NAME

if __name__ == "__main__":
    app(prog_name=APP_NAME)
