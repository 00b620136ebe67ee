"""Docker Compose stack: web server, PHP, database and phpMyAdmin.

Collects the stack answers, then generates ``docker-compose.yml``, an
optional ``docker-compose.override.yml`` (phpMyAdmin), the web server vhost,
the PHP ini overrides and the wp-cli entrypoint script.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from wppg.modules.base import Module, SummaryEntry
from wppg.modules.project_info import ProjectInfo
from wppg.modules.wordpress import WordPressConfigurator
from wppg.options import OptionsStore
from wppg.utils import snake_case, write_file
from wppg.validators import validate_not_empty, validate_port

WEB_SERVERS: tuple[str, ...] = ("apache", "nginx")
PHP_VERSIONS: tuple[str, ...] = ("7.2", "7.1", "7.0", "5.6", "5.5", "5.4")

# Engine -> (available versions, default version)
DB_VERSIONS: dict[str, tuple[tuple[str, ...], str]] = {
    "mariadb": (("10.4", "10.3", "10.2", "10.1", "10.0"), "10.4"),
    "mysql": (("8.0", "5.7", "5.6", "5.5"), "5.7"),
}

DEFAULT_WEB_PORT = "80"
DEFAULT_DB_PORT = "3306"
DEFAULT_DB_NAME = "wp"
DEFAULT_DB_ROOT_PASSWORD = "wp"
PHPMYADMIN_PORT = 8080

COMPOSE_VERSION = "3"

SECRET_KEYS = frozenset({"db_root_password"})

_PHP_INI_VOLUME = (
    "./development/docker/php/php-ini-overrides.ini:/usr/local/etc/php/conf.d/99-overrides.ini"
)
_SCRIPTS_VOLUME = "./development/docker/php/scripts:/scripts"


class DockerCompose(Module):
    """Collects the container stack and writes the Docker files."""

    SLUG = "docker_compose"
    NAME = "Docker Compose"

    # -- Collection --------------------------------------------------------

    def run(self, options: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        self.options = {}

        self.prompter.note("Web server:")
        self._ask_web_server()

        self.prompter.note("Database:")
        self._ask_database(options)

        self.prompter.note("PHPMyAdmin:")
        self.options["phpmyadmin"] = self.prompter.confirm(
            "Do you want to include PHPMyAdmin?", default=True
        )

        return {self.SLUG: self.options}

    def _ask_web_server(self) -> None:
        self.options["webserver"] = self.prompter.ask(
            "Which web server do you want to use?",
            default=WEB_SERVERS[0],
            choices=WEB_SERVERS,
        )
        self.options["webserver_port"] = self.prompter.ask(
            "Which port number should the web server use?",
            default=DEFAULT_WEB_PORT,
            validator=validate_port,
        )
        self.options["php_version"] = self.prompter.ask(
            "Which version of PHP do you want to use?",
            default=PHP_VERSIONS[0],
            choices=PHP_VERSIONS,
        )

    def _ask_database(self, options: Mapping[str, Any]) -> None:
        db = self.prompter.ask(
            "Which database manager should the project use?",
            default="mariadb",
            choices=tuple(DB_VERSIONS),
        )
        versions, default_version = DB_VERSIONS[db]
        version = self.prompter.ask(
            "Which version of the database manager should the project use?",
            default=default_version,
            choices=versions,
        )
        image = self.prompter.ask(
            "Here is your last chance to change the name of the docker image for the database",
            default=f"{db}:{version}",
            validator=validate_not_empty,
        )
        port = self.prompter.ask(
            "Which port number should the db server use?",
            default=DEFAULT_DB_PORT,
            validator=validate_port,
        )
        name = self.prompter.ask(
            "What is the name of the database?",
            default=_default_db_name(options),
            validator=validate_not_empty,
        )
        root_password = self.prompter.ask(
            "What is the password of the root user?",
            default=DEFAULT_DB_ROOT_PASSWORD,
            validator=validate_not_empty,
            password=True,
        )

        self.options.update(
            {
                "db": db,
                "db_version": version,
                "db_service_name": image.strip().lower(),
                "db_port": port,
                "db_name": name,
                "db_root_password": root_password,
            }
        )

    # -- Summary / export --------------------------------------------------

    def summarize(self) -> list[SummaryEntry]:
        o = self.options
        return [
            SummaryEntry("Web server", o["webserver"]),
            SummaryEntry("Port", str(o["webserver_port"])),
            SummaryEntry("PHP version", o["php_version"]),
            SummaryEntry("Database", o["db"]),
            SummaryEntry("Database version", o["db_version"]),
            SummaryEntry("Database port", str(o["db_port"])),
            SummaryEntry("Database service name", o["db_service_name"]),
            SummaryEntry("Database name", o["db_name"]),
            SummaryEntry("Database root password", "*" * len(o["db_root_password"])),
            SummaryEntry("Include PHPMyAdmin", "yes" if o["phpmyadmin"] else "no"),
        ]

    def export(self) -> dict[str, Any]:
        return {k: v for k, v in self.options.items() if k not in SECRET_KEYS}

    # -- Generation --------------------------------------------------------

    def execute(self, options: OptionsStore) -> None:
        root = self.project_root(options)
        stack = options.require(self.SLUG)
        services, extra_services = build_services(stack)

        write_file(root / "docker-compose.yml", dump_compose(services, volumes={"db": {}}))
        if extra_services:
            write_file(root / "docker-compose.override.yml", dump_compose(extra_services))

        docker_dir = root / "development" / "docker"
        self.renderer.render_to_file(
            f"docker_compose/vhost/{stack['webserver']}.conf.j2",
            docker_dir / "vhost.conf",
            {"port": stack["webserver_port"]},
        )
        self.renderer.render_to_file(
            "docker_compose/php/php-ini-overrides.ini.j2",
            docker_dir / "php" / "php-ini-overrides.ini",
        )
        self.renderer.render_to_file(
            "docker_compose/wpcli/scripts/entrypoint.sh.j2",
            docker_dir / "php" / "scripts" / "entrypoint.sh",
            self._entrypoint_context(options, stack),
        )

    def _entrypoint_context(self, options: OptionsStore, stack: Mapping[str, Any]) -> dict[str, Any]:
        wp = WordPressConfigurator.SLUG
        return {
            "webserver": stack["webserver"],
            "db_name": stack["db_name"],
            "db_root_password": stack["db_root_password"],
            "db_port": stack["db_port"],
            "project_name": options.require(ProjectInfo.SLUG, "project_name"),
            "wp_db_prefix": options.require(wp, "wp_db_prefix"),
            "wp_user_name": options.require(wp, "wp_user_name"),
            "wp_user_password": options.require(wp, "wp_user_password"),
            "wp_user_email": options.require(wp, "wp_user_email"),
        }


# ---------------------------------------------------------------------------
# Service definitions
# ---------------------------------------------------------------------------


def build_services(stack: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Build the Compose service trees from the module's answers.

    Returns:
        ``(services, extra_services)``: the services of
        ``docker-compose.yml`` and of ``docker-compose.override.yml``
        (empty when phpMyAdmin is not wanted).
    """
    php_version = stack["php_version"]
    web_port = int(stack["webserver_port"])
    services: dict[str, Any] = {}

    if stack["webserver"] == "apache":
        services["php"] = {
            "image": f"chialab/php-dev:{php_version}-apache",
            "ports": [f"{web_port}:80"],
            "volumes": [
                "./:/var/www",
                "./development/docker/vhost.conf:/etc/apache2/sites-enabled/000-default.conf",
            ],
        }
    else:
        services["nginx"] = {
            "image": "nginx:latest",
            "ports": [f"{web_port}:80"],
            "volumes": [
                "./:/var/www",
                "./development/docker/vhost.conf:/etc/nginx/conf.d/default.conf",
            ],
            "links": ["php"],
        }
        services["php"] = {
            "image": f"chialab/php-dev:{php_version}-fpm",
            "volumes": ["./:/var/www"],
        }

    php = services["php"]
    php["volumes"].extend([_PHP_INI_VOLUME, _SCRIPTS_VOLUME])
    php["restart"] = "on-failure"
    php["working_dir"] = "/var/www/html"
    php["depends_on"] = ["mysql"]

    services["wpcli"] = {
        "image": f"chialab/php-dev:{php_version}-fpm",
        "volumes": ["./:/var/www", _SCRIPTS_VOLUME, _PHP_INI_VOLUME],
        "entrypoint": ["bash", "/scripts/entrypoint.sh"],
        "working_dir": "/var/www/html",
        "depends_on": ["mysql"],
    }

    services["mysql"] = {
        "image": stack["db_service_name"],
        "ports": [f"{int(stack['db_port'])}:3306"],
        "environment": {
            "MYSQL_DATABASE": stack["db_name"],
            "MYSQL_ROOT_PASSWORD": stack["db_root_password"],
        },
        "volumes": ["db:/var/lib/mysql"],
        "healthcheck": {
            "test": [
                "CMD-SHELL",
                'mysql --database=$$MYSQL_DATABASE --password=$$MYSQL_ROOT_PASSWORD '
                '--execute="SELECT count(table_name) > 0 FROM information_schema.tables;" '
                "--skip-column-names -B",
            ],
            "interval": "30s",
            "timeout": "10s",
            "retries": 4,
        },
    }

    extra_services: dict[str, Any] = {}
    if stack["phpmyadmin"]:
        extra_services["phpmyadmin"] = {
            "image": "phpmyadmin/phpmyadmin",
            "environment": [
                "PMA_HOST=mysql",
                "PMA_USER=root",
                f"PMA_PASSWORD={stack['db_root_password']}",
            ],
            "restart": "always",
            "ports": [f"{PHPMYADMIN_PORT}:80"],
        }

    return services, extra_services


def dump_compose(services: dict[str, Any], volumes: dict[str, Any] | None = None) -> str:
    """Serialise a Compose document with block style and 2-space indents."""
    content: dict[str, Any] = {"version": COMPOSE_VERSION, "services": services}
    if volumes is not None:
        content["volumes"] = volumes
    return yaml.safe_dump(content, default_flow_style=False, sort_keys=False, indent=2)


def _default_db_name(options: Mapping[str, Any]) -> str:
    slug = options.get(ProjectInfo.SLUG, {}).get("project_slug", "")
    return snake_case(slug) or DEFAULT_DB_NAME
