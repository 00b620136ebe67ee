"""WordPress administrator account and database table prefix."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wppg.modules.base import Module, SummaryEntry
from wppg.validators import (
    validate_db_prefix,
    validate_email,
    validate_not_empty,
    validate_password,
)

DEFAULT_ADMIN_NAME = "adminwp"
DEFAULT_ADMIN_EMAIL = "adminwp@example.com"
DEFAULT_TABLE_PREFIX = "wppg_"

SECRET_KEYS = frozenset({"wp_user_password"})


class WordPressConfigurator(Module):
    """Collects the WordPress settings consumed by the wp-cli entrypoint."""

    SLUG = "wordpress_configurator"
    NAME = "WordPress Configuration"

    def run(self, options: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        self.prompter.note("Some questions about WordPress...")

        user_name = self.prompter.ask(
            "What is the name of the admin account?",
            default=DEFAULT_ADMIN_NAME,
            validator=validate_not_empty,
        )
        user_email = self.prompter.ask(
            "What is the email address of the admin account?",
            default=DEFAULT_ADMIN_EMAIL,
            validator=validate_email,
        )
        user_password = self.prompter.ask(
            "What is the admin password?",
            validator=validate_password,
            password=True,
        )
        db_prefix = self.prompter.ask(
            "The prefix of your database tables?",
            default=DEFAULT_TABLE_PREFIX,
            validator=validate_db_prefix,
        )

        self.options = {
            "wp_user_name": user_name,
            "wp_user_email": user_email,
            "wp_user_password": user_password,
            "wp_db_prefix": db_prefix,
        }
        return {self.SLUG: self.options}

    def summarize(self) -> list[SummaryEntry]:
        return [
            SummaryEntry("Admin name", self.options["wp_user_name"]),
            SummaryEntry("Admin email", self.options["wp_user_email"]),
            SummaryEntry("Admin password", "*" * len(self.options["wp_user_password"])),
            SummaryEntry("Table prefix (database)", self.options["wp_db_prefix"]),
        ]

    def export(self) -> dict[str, Any]:
        return {k: v for k, v in self.options.items() if k not in SECRET_KEYS}

