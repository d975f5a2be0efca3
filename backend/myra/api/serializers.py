"""
Response shaping.

Clients only ever see canonical ids: `id` is replaced by `canonical_id`,
parent foreign keys are dropped, and the few cross-references clients need
(entry to pasture, issue to pastures) are translated to pasture canonical ids.
Keys are camelCase on the way out and on the way in.
"""
from __future__ import annotations
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from myra.domain.plan.models import Plan, PlanVersion
from myra.domain.schedule.models import GrazingScheduleEntry

_PARENT_KEYS = frozenset({
    "plan_id",
    "pasture_id",
    "plant_community_id",
    "monitoring_area_id",
    "grazing_schedule_id",
    "minister_issue_id",
    "issue_id",
    "canonical_id",
})


class CamelModel(BaseModel):
    """Request bodies accept camelCase keys (snake_case too)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _value(value: Any, pasture_keys: Mapping[int, int]) -> Any:
    if is_dataclass(value):
        return externalize(value, pasture_keys)
    if isinstance(value, list):
        return [_value(v, pasture_keys) for v in value]
    return value


def externalize(entity: Any, pasture_keys: Optional[Mapping[int, int]] = None) -> Dict[str, Any]:
    """
    `pasture_keys` maps internal pasture ids to canonical ids for the
    entities that point at pastures from outside the pasture subtree.
    """
    pasture_keys = pasture_keys or {}
    out: Dict[str, Any] = {}
    for f in fields(entity):
        name = f.name
        value = getattr(entity, name)

        if name == "pasture_ids":
            out["pastures"] = [pasture_keys.get(i) for i in value]
            continue
        if name == "pasture_id" and isinstance(entity, GrazingScheduleEntry):
            out["pastureId"] = pasture_keys.get(value)
            continue
        if name in _PARENT_KEYS:
            continue
        if name == "id" and getattr(entity, "canonical_id", None) is not None:
            value = entity.canonical_id

        out[to_camel(name)] = _value(value, pasture_keys)
    return out


def serialize_plan(plan: Plan) -> Dict[str, Any]:
    return externalize(plan, {p.id: p.canonical_id for p in plan.pastures})


def serialize_version(v: PlanVersion) -> Dict[str, Any]:
    return {
        "version": v.version,
        "createdAt": v.created_at,
        "isCurrent": v.is_current,
    }
