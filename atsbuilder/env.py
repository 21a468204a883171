from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the working directory (or ``env_path``) if present.

    Existing environment variables win over values in the file.
    Returns True when a file was loaded.
    """
    env_path = Path(env_path) if env_path else Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)
