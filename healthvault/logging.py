"""
Logging for HealthVault.

Everything logs under the ``healthvault`` logger tree: ``healthvault`` for
request lines and error handlers, ``healthvault.auth`` and
``healthvault.records`` for the routers, ``healthvault.files`` for the file
store, ``healthvault.storage`` for backend selection and database failures.
Request lines carry the request id that is also returned in the
``X-Request-ID`` header and in error bodies. Uploaded file contents, password
hashes and tokens are never logged.
"""
import logging
import sys

APP_LOGGER = "healthvault"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Sends records to stdout and keeps uvicorn's loggers at the app's level."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout, force=True)
    for name in (APP_LOGGER, "uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
