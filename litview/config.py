from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # Paths given to litview.render() resolve against this directory
    project_root: Path = Path('.')

    # Paths given through the view engine resolve against this directory
    views_dir: Path = PACKAGE_DIR / 'app' / 'views'
    view_extension: str = '.html'
    encoding: str = 'utf-8'

    # Name used when locals are exposed as a single object
    default_key: str = '$'

    # Structured render events on stdout
    trace_events: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "LITVIEW_"


settings = Settings()
