"""
Resource domain models.

A ResourceSpec describes one proxied route: where it forwards to,
how the upstream payload is reshaped and what to answer when that fails.
"""

import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

ResourceMode = Literal["proxy", "static", "stub_list", "echo", "search"]
ResourceShape = Literal["envelope", "collection", "category_index", "record", "sub_category"]

_PATH_PARAM_RE = re.compile(r"{(\w+)}")


class ResourceSpec(BaseModel):
    """
    Configuration record for one proxied resource.
    """

    name: str
    route: str
    methods: List[str] = Field(default_factory=lambda: ["GET"])
    mode: ResourceMode = "proxy"
    upstream_path: Optional[str] = None
    cache_seconds: int = Field(default=0, ge=0)
    shape: ResourceShape = "envelope"
    collection_keys: List[str] = Field(default_factory=lambda: ["data"])
    fallback: Any = Field(default_factory=list)
    static_data: Any = None

    @field_validator("methods")
    @classmethod
    def _upper_methods(cls, value: List[str]) -> List[str]:
        return [m.upper() for m in value]

    @model_validator(mode="after")
    def _upstream_params_bound(self) -> "ResourceSpec":
        unbound = set(_PATH_PARAM_RE.findall(self.upstream_path or "")) - set(self.route_params)
        if unbound:
            raise ValueError(f"upstream_path uses parameters missing from route: {sorted(unbound)}")
        return self

    @property
    def route_params(self) -> List[str]:
        return _PATH_PARAM_RE.findall(self.route)

    @property
    def forward_method(self) -> str:
        return "POST" if "POST" in self.methods and "GET" not in self.methods else "GET"

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "ResourceSpec":
        """Factory to create from a resources.yml entry."""
        return cls(name=name, **(data or {}))
