"""goscaffold scaffolder -- plans and renders Go backend project trees.

Quick usage::

    from goscaffold.config import Config
    from goscaffold.scaffolder import ProjectGenerator

    config = Config(app_name="blog", sessions=True, tailwind=True)
    generator = ProjectGenerator(config, cwd="/tmp", module_path="github.com/me/blog")
    project_root = await generator.materialize()
"""

from goscaffold.scaffolder.generator import ProjectGenerator
from goscaffold.scaffolder.planner import ScaffoldError, ScaffoldPlan, plan_scaffold
from goscaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldPlan",
    "TemplateRenderer",
    "plan_scaffold",
]
