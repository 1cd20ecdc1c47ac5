import logging
import os
import tomllib
from datetime import date
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.models.dto import Project, Work

logger = logging.getLogger(__name__)

WORK_FILENAME = "work.toml"
PROJECTS_FILENAME = "projects.toml"

_Model = TypeVar("_Model", bound=BaseModel)


def _read_toml(path: str) -> Optional[Dict[str, Any]]:
    if not os.path.exists(path):
        logger.warning("Content file %s not found; rendering without it", path)
        return None
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load content file %s: %s", path, e)
        return None


def _load_records(path: str, table: str, model: Type[_Model]) -> List[_Model]:
    data = _read_toml(path)
    if data is None:
        return []
    rows = data.get(table)
    if rows is None:
        return []
    if not isinstance(rows, list):
        logger.warning("Expected [[%s]] tables in %s", table, path)
        return []

    records: List[_Model] = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping invalid [[%s]] entry in %s: %s", table, path, e)
    return records


def load_work_experience(path: str) -> List[Work]:
    """Work history from ``[[experience]]`` tables, in file order."""
    return _load_records(path, "experience", Work)


def load_projects(path: str) -> List[Project]:
    """Projects from ``[[project]]`` tables, in file order."""
    return _load_records(path, "project", Project)


def compute_age(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return max(0, today.year - birth_date.year - (0 if had_birthday else 1))


class ProfileContent:
    """Loads the static page content from a data directory on every call."""

    def __init__(self, data_dir: str, birth_date: date):
        self.data_dir = data_dir
        self.birth_date = birth_date

    @property
    def work_path(self) -> str:
        return os.path.join(self.data_dir, WORK_FILENAME)

    @property
    def projects_path(self) -> str:
        return os.path.join(self.data_dir, PROJECTS_FILENAME)

    def work(self) -> List[Work]:
        return load_work_experience(self.work_path)

    def projects(self) -> List[Project]:
        return load_projects(self.projects_path)

    def age(self, today: Optional[date] = None) -> int:
        return compute_age(self.birth_date, today)

    def missing_files(self) -> List[str]:
        return [p for p in (self.work_path, self.projects_path) if not os.path.exists(p)]
