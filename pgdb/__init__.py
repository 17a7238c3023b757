# Apply the kopf thirdparty patch before any other import loads kopf internals.
# See pgdb/utils/override.py.
from pgdb.utils.override import patch_kopf_thirdparty
patch_kopf_thirdparty()

try:
    import os
    from dotenv import load_dotenv, find_dotenv

    env_file = os.environ.get("ENV_FILE", ".env")
    path = find_dotenv(filename=env_file, raise_error_if_not_found=True)
    print(f"Loading environment variables from {path}")
    load_dotenv(dotenv_path=path)

except IOError:
    # No file to set environment variables
    pass

from pgdb.handlers import (  # noqa: E402
    postgresdatabase,
    probes,
)

__all__ = [
    "postgresdatabase",
    "probes",
]

__version__ = "0.1.0"
