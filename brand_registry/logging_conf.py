import logging
import sys


def configure_logging(level: str = "WARNING") -> None:
    # stderr keeps log lines out of the interactive prompt stream
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.addHandler(handler)
