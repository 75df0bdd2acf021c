"""Module resolution router for the puzzle role implementations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from project_config import get_section

PUZZLES_ROOT = Path(__file__).resolve().parents[1] / "puzzles"
DEFAULT_IMPLS = {"parser": "text", "solver": "bfs", "printer": "text"}
SUPPORTED_ROLES = frozenset(DEFAULT_IMPLS)


class RouterError(RuntimeError):
    """Raised when a module resolution request cannot be satisfied."""


@dataclass(frozen=True)
class ResolvedModule:
    """Description of the module chosen for a puzzle role."""

    puzzle_kind: str
    role: str
    impl_id: str
    module_id: str
    module_path: Path
    state: str
    decision_source: str
    allow_fallback: bool
    fallback_used: bool
    contracts: str | None
    config: Dict[str, Any]

    def journal(self) -> Dict[str, Any]:
        """Summary recorded by the driver for every role it used."""

        return {
            "module_id": self.module_id,
            "impl": self.impl_id,
            "state": self.state,
            "decision_source": self.decision_source,
            "fallback_used": self.fallback_used,
        }


_DEF_STATE = "default"


def _normalise_env(env: Mapping[str, str]) -> Dict[str, str]:
    return {str(k).upper(): str(v) for k, v in env.items()}


def _extract_role_policy(puzzle_kind: str, role: str, profile: str) -> Dict[str, Any]:
    modules = get_section("modules", default={})
    puzzle_cfg = modules.get(puzzle_kind, {}) if isinstance(modules, dict) else {}
    role_cfg = puzzle_cfg.get(role, {}) if isinstance(puzzle_cfg, dict) else {}

    policy: Dict[str, Any] = {}
    if isinstance(role_cfg, dict):
        for key, value in role_cfg.items():
            if key == "by_profile":
                continue
            policy[key] = value

        by_profile = role_cfg.get("by_profile")
        if isinstance(by_profile, dict):
            profile_block = by_profile.get(profile.lower())
            if isinstance(profile_block, dict):
                policy.update(profile_block)
    return policy


def _resolve_impl(policy: Dict[str, Any], env: Dict[str, str], role: str) -> tuple[str, str, str]:
    role_upper = role.upper()
    cli_impl_key = f"CLI_PUZZLE_{role_upper}_IMPL"
    cli_state_key = f"CLI_PUZZLE_{role_upper}_STATE"
    env_impl_key = f"PUZZLE_{role_upper}_IMPL"
    env_state_key = f"PUZZLE_{role_upper}_STATE"

    decision_source = "config"
    impl = str(policy["impl"])
    state = str(policy["state"])

    if env.get(env_impl_key):
        impl = env[env_impl_key]
        decision_source = "env"
    if env.get(env_state_key):
        state = env[env_state_key]
        decision_source = "env"

    if env.get(cli_impl_key):
        impl = env[cli_impl_key]
        decision_source = "cli"
    if env.get(cli_state_key):
        state = env[cli_state_key]
        decision_source = "cli"

    return impl, state, decision_source


def _apply_policy_defaults(policy: Dict[str, Any], role: str) -> Dict[str, Any]:
    merged = dict(policy)
    merged.setdefault("impl", DEFAULT_IMPLS[role])
    merged.setdefault("state", _DEF_STATE)
    merged.setdefault("allow_fallback", True)
    return merged


def resolve(puzzle_kind: str, role: str, profile: str, env: Mapping[str, str]) -> ResolvedModule:
    if role not in SUPPORTED_ROLES:
        raise RouterError(f"Unsupported role '{role}'")

    puzzle_root = PUZZLES_ROOT / puzzle_kind
    if not puzzle_root.is_dir():
        raise RouterError(f"Puzzle '{puzzle_kind}' is not registered under 'src/puzzles'")

    env_map = _normalise_env(env)
    policy = _apply_policy_defaults(_extract_role_policy(puzzle_kind, role, profile), role)

    impl, state, decision_source = _resolve_impl(policy, env_map, role)
    default_impl = DEFAULT_IMPLS[role]

    allow_fallback = bool(policy.get("allow_fallback", True))
    contracts = policy.get("contracts")

    module_root = puzzle_root / role / impl
    fallback_used = False
    if not module_root.is_dir():
        if allow_fallback and impl != default_impl:
            fallback_root = puzzle_root / role / default_impl
            if fallback_root.is_dir():
                module_root = fallback_root
                impl = default_impl
                fallback_used = True
                decision_source = "fallback"
            else:
                raise RouterError(
                    f"Requested implementation '{impl}' for role '{role}' is missing and no fallback is available"
                )
        else:
            raise RouterError(
                f"Implementation '{impl}' for role '{role}' is not available for puzzle '{puzzle_kind}'"
            )

    module_path = module_root / "__init__.py"
    if not module_path.exists():
        raise RouterError(
            f"Implementation package '{module_root}' does not contain an __init__.py file"
        )

    return ResolvedModule(
        puzzle_kind=puzzle_kind,
        role=role,
        impl_id=impl,
        module_id=f"{puzzle_kind}:{role}/{impl}",
        module_path=module_path,
        state=state,
        decision_source=decision_source,
        allow_fallback=allow_fallback,
        fallback_used=fallback_used,
        contracts=contracts if isinstance(contracts, str) else None,
        config=dict(policy),
    )


__all__ = ["DEFAULT_IMPLS", "ResolvedModule", "RouterError", "resolve", "SUPPORTED_ROLES"]
