"""User service configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from aspectdemo.core.config import config_properties


@config_properties(prefix="aspectdemo.users")
@dataclass
class UserProperties:
    """Configuration for the user service (aspectdemo.users.*).

    ``logout_fails`` makes ``UserService.log_out`` raise, so after-throwing
    advice can be observed end to end.
    """

    logout_fails: bool = False
