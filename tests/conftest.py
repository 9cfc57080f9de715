from collections.abc import Callable
from pathlib import Path
from typing import Optional

import pytest

from hostconf.tree import ConfigNode

APP_PATH = {"appDir": "/somePath"}
SIMPLE_PARAMS = {"maxRequests": 10}
APP_INIT_PARAMS = {"timeout": 5}
APP_IDLE_PARAMS = {"timeout": 8}
LOCATION_PARAMS = {"path": "/"}

AppBuilder = Callable[..., ConfigNode]


@pytest.fixture
def init_config() -> AppBuilder:
    """Build a location -> application tree and return the application node.

    Each argument says where to declare that setting: "self" puts it on the
    application node, "parent" on the location node, None leaves it out.
    """

    def build(
        scheduler: Optional[str] = None,
        idle: Optional[str] = None,
        init: Optional[str] = None,
    ) -> ConfigNode:
        parent = ConfigNode("location", LOCATION_PARAMS)
        app = ConfigNode("application", APP_PATH, parent=parent)

        def choose(selection: str) -> ConfigNode:
            if selection == "self":
                return app
            if selection == "parent":
                return parent
            raise ValueError(f"Invalid selection: {selection}")

        if scheduler:
            ConfigNode("simple_scheduler", SIMPLE_PARAMS, parent=choose(scheduler))
        if idle:
            ConfigNode("app_idle_timeout", APP_IDLE_PARAMS, parent=choose(idle))
        if init:
            ConfigNode("app_init_timeout", APP_INIT_PARAMS, parent=choose(init))
        return app

    return build


TREE_YAML = """\
name: server
values:
  listen: 3838
children:
  - name: simple_scheduler
    values:
      maxRequests: 20
  - name: app_init_timeout
    values:
      timeout: 30
  - name: location
    values:
      path: /
    children:
      - name: application
        values:
          appDir: /srv/apps/sales
        children:
          - name: app_idle_timeout
            values:
              timeout: 12
      - name: application
        values:
          appDir: /srv/apps/ops
"""


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    path = tmp_path / "hostconf.yaml"
    path.write_text(TREE_YAML)
    return path
