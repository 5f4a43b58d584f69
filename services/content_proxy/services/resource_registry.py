"""
Proxied resource registry.

Loads resources.yml and provides name-to-ResourceSpec mapping.
Merges `defaults` into every resource entry.
"""

import logging
import os
import string
from typing import Dict, List

import yaml
from pydantic import ValidationError

from ..models.resource import ResourceSpec

logger = logging.getLogger("content_proxy.resource_registry")


class ResourceRegistry:
    def __init__(self, config_path: str):
        self.config_path = config_path
        self._registry: Dict[str, ResourceSpec] = {}

    def load_resources_config(self) -> Dict[str, ResourceSpec]:
        """
        Load and cache resources.yml.

        Returns:
            Dict of resource name -> ResourceSpec
        """
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                # Substitute environment variables using string.Template.
                template = string.Template(f.read())
                content = template.safe_substitute(os.environ.copy())
                cfg = yaml.safe_load(content) or {}
        except FileNotFoundError:
            logger.warning(f"Resources config not found at {self.config_path}")
            self._registry = {}
            return self._registry
        except yaml.YAMLError as e:
            logger.error(f"Error parsing resources config: {e}")
            self._registry = {}
            return self._registry

        defaults = cfg.get("defaults") or {}
        registry: Dict[str, ResourceSpec] = {}
        for name, entry in (cfg.get("resources") or {}).items():
            merged = {**defaults, **(entry or {})}
            try:
                registry[name] = ResourceSpec.from_dict(name, merged)
            except ValidationError as e:
                logger.error(f"Invalid resource definition '{name}': {e}")

        self._registry = registry
        logger.info(f"Loaded {len(self._registry)} resources from {self.config_path}")
        return self._registry

    def list_resources(self) -> List[ResourceSpec]:
        return list(self._registry.values())

    def routes(self) -> Dict[str, List[ResourceSpec]]:
        """Group resources by inbound route (several methods may share a path)."""
        grouped: Dict[str, List[ResourceSpec]] = {}
        for resource in self._registry.values():
            grouped.setdefault(resource.route, []).append(resource)
        return grouped
