"""YAML loading for ctsnooper.yaml with a cap on alias references.

A few hundred bytes of nested aliases can expand to gigabytes once
composed, so a config may reference at most MAX_ALIASES anchors.
"""

from __future__ import annotations

import yaml

MAX_ALIASES = 100


class AliasLimitLoader(yaml.SafeLoader):
    """SafeLoader that counts alias events while composing."""

    max_aliases = MAX_ALIASES

    def __init__(self, stream):
        super().__init__(stream)
        self.alias_count = 0

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            self.alias_count += 1
            if self.alias_count > self.max_aliases:
                raise yaml.YAMLError(f"YAML alias limit exceeded (max {self.max_aliases})")
        return super().compose_node(parent, index)


def safe_yaml_load(stream):
    """Parse one YAML document like yaml.safe_load, refusing alias bombs."""
    return yaml.load(stream, Loader=AliasLimitLoader)
