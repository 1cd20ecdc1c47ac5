"""Static page content (work history, projects, age)."""

from .content import ProfileContent, compute_age, load_projects, load_work_experience

__all__ = ["ProfileContent", "compute_age", "load_projects", "load_work_experience"]
