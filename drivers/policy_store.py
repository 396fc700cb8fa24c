"""
Purpose: Persistence for the assignment policy.
What it does:
Loads / saves AssignmentConfig as a JSON document so operators can change
the policy between runs. The engine never reads this itself; callers load a
config here and pass it into every scoring call.

Configuration (.env or environment):
ASSIGNMENT_CONFIG_PATH=./assignment_config.json
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from .policy import AssignmentConfig, default_assignment_config

load_dotenv()

logger = logging.getLogger(__name__)

STORAGE_KEY = "assignmentConfig.v1"
DEFAULT_CONFIG_PATH = "assignment_config.json"


class PolicyStoreError(Exception):
    """Raised when the policy cannot be written."""
    pass


class AssignmentPolicyStore:
    def __init__(self, path: Optional[str | Path] = None):
        self.path = Path(path or os.getenv("ASSIGNMENT_CONFIG_PATH") or DEFAULT_CONFIG_PATH)

    def load(self) -> AssignmentConfig:
        """
        Missing file -> defaults.
        Unreadable or invalid file -> defaults (logged), never raises.
        """
        if not self.path.exists():
            return default_assignment_config()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
            data = document.get(STORAGE_KEY, document)
            return AssignmentConfig.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Failed to load assignment config from %s: %s", self.path, exc)
            return default_assignment_config()

    def save(self, config: AssignmentConfig) -> None:
        config.validate()
        document = {STORAGE_KEY: config.to_dict()}

        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".assignment-config-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise PolicyStoreError(f"Could not write assignment config to {self.path}: {exc}") from exc
        finally:
            # replace did not happen
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info("Saved assignment config to %s", self.path)

    def update(self, change: Callable[[AssignmentConfig], AssignmentConfig]) -> AssignmentConfig:
        """
        Load, apply `change`, save and return the new config.
        e.g. store.update(lambda c: c.with_hard_constraint("regionMatch", False))
        """
        config = change(self.load())
        self.save(config)
        return config
