"""Load an access policy from a YAML file.

Deployments can replace the compiled-in table with a policy file::

    roles:
      guest:
        permissions: [profile.view, feedback.create]
        routes: [/dashboard, /dashboard/my-reservation]
        menu:
          - {title: Dashboard, href: /dashboard/, icon: bar-chart}

Every role must be present. The file is rejected as a whole on any error.
"""

from pathlib import Path
from typing import Any, Dict, Union

from hotelaccess.common.config import load_config

from .navigation import parse_menu_item
from .roles import Role
from .ruleset import AccessPolicy, PolicyError, RoleRuleset, validate_policy


def _as_list(value: Any, field: str, role_name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PolicyError([f"{role_name}: '{field}' must be a list"])
    return value


def parse_role_ruleset(role_name: str, role_dict: Dict[str, Any]) -> RoleRuleset:
    """Parse one role's section of a policy file."""
    if not isinstance(role_dict, dict):
        raise PolicyError([f"{role_name}: ruleset must be a mapping"])

    permissions = [str(p) for p in _as_list(role_dict.get("permissions"), "permissions", role_name)]
    routes = [str(r) for r in _as_list(role_dict.get("routes"), "routes", role_name)]

    try:
        menu = [
            parse_menu_item(item)
            for item in _as_list(role_dict.get("menu"), "menu", role_name)
        ]
        return RoleRuleset.build(permissions, menu, routes)
    except (ValueError, AttributeError) as e:
        raise PolicyError([f"{role_name}: {e}"]) from e


def parse_policy(config_dict: Dict[str, Any], source: str = "config") -> AccessPolicy:
    """Parse and validate a full policy mapping.

    Raises:
        PolicyError: On unknown roles, malformed sections or
            invariant violations
    """
    roles_section = config_dict.get("roles")
    if not isinstance(roles_section, dict):
        raise PolicyError(["policy must define a 'roles' mapping"])

    rulesets = {}
    for role_name, role_dict in roles_section.items():
        try:
            role = Role(str(role_name))
        except ValueError:
            raise PolicyError([f"unknown role: {role_name}"]) from None
        rulesets[role] = parse_role_ruleset(role.value, role_dict)

    policy = AccessPolicy.from_rulesets(rulesets, source=source)
    problems = validate_policy(policy)
    if problems:
        raise PolicyError(problems)
    return policy


def load_policy_file(path: Union[str, Path]) -> AccessPolicy:
    """Load, parse and validate a YAML policy file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is invalid YAML
        PolicyError: If the policy is invalid
    """
    config_dict = load_config(path)
    return parse_policy(config_dict, source=str(path))
