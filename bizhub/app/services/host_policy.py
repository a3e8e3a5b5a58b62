"""
Host Policy

Classifies the host a request arrived on:

- platform default hosts (``localhost``, the apex, ``www``) -> resolve by owner
- ``<label>.<platform domain>`` -> resolve by subdomain
- anything else -> resolve by verified custom domain
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional


class HostKind(str, Enum):
    default = "default"
    subdomain = "subdomain"
    custom_domain = "custom_domain"


@dataclass(frozen=True)
class HostMatch:
    kind: HostKind
    value: Optional[str] = None


def normalize_host(host: Optional[str]) -> str:
    """Lower-case and strip the port and any trailing dot"""
    host = (host or "").strip().lower()
    if host.startswith("["):
        # IPv6 literal, e.g. [::1]:8000
        return host.split("]", 1)[0] + "]"
    return host.split(":", 1)[0].rstrip(".")


@dataclass(frozen=True)
class HostPolicy:
    platform_domain: str
    default_hosts: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls, platform_domain: str, default_hosts: Iterable[str]) -> "HostPolicy":
        return cls(
            platform_domain=normalize_host(platform_domain),
            default_hosts=frozenset(normalize_host(h) for h in default_hosts),
        )

    def classify(self, host: Optional[str]) -> HostMatch:
        host = normalize_host(host)
        if (
            not host
            or host in self.default_hosts
            or host == self.platform_domain
            or host == f"www.{self.platform_domain}"
        ):
            return HostMatch(HostKind.default)

        suffix = f".{self.platform_domain}"
        if host.endswith(suffix):
            label = host[: -len(suffix)]
            if label and "." not in label:
                return HostMatch(HostKind.subdomain, label)
            # Nested labels under the platform domain are not tenant hosts
            return HostMatch(HostKind.default)

        return HostMatch(HostKind.custom_domain, host)
