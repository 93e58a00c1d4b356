# topmark:header:start
#
#   project      : DeployKit
#   file         : settings.py
#   file_relpath : src/deploykit/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Catalogue of scalar settings.

Each `Setting` ties the block key used in ``[kubernetes]`` to its property key
and value kind. The catalogue drives validation of declared values and the
ordering of `KubernetesExtension.effective_settings`;
defaults live with the accessors on the extension because several of them are
computed from project directories or from other settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

from deploykit.config.binding import as_bool, as_int, as_path, as_str
from deploykit.config.keys import PropKey

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class SettingKind(Enum):
    """Value kinds supported by the resolvers."""

    BOOL = "boolean"
    INT = "integer"
    STR = "string"
    PATH = "path"

    @property
    def converter(self) -> Callable[[Any, str], Any]:
        """Block value converter for this kind."""
        return _CONVERTERS[self]


_CONVERTERS: Final[dict[SettingKind, Callable[[Any, str], Any]]] = {
    SettingKind.BOOL: as_bool,
    SettingKind.INT: as_int,
    SettingKind.STR: as_str,
    SettingKind.PATH: as_path,
}


@dataclass(frozen=True)
class Setting:
    """One independently resolvable scalar setting.

    Attributes:
        name (str): Block key, also the stem of the ``<name>_or_default`` accessor.
        key (str): Property key consulted first.
        kind (SettingKind): Value kind.
    """

    name: str
    key: str
    kind: SettingKind

    @property
    def accessor(self) -> str:
        """Name of the extension method resolving this setting."""
        return f"{self.name}_or_default"


_B = SettingKind.BOOL
_I = SettingKind.INT
_S = SettingKind.STR
_P = SettingKind.PATH

SETTINGS: Final[tuple[Setting, ...]] = (
    # General
    Setting("offline", PropKey.OFFLINE, _B),
    Setting("use_color", PropKey.USE_COLOR, _B),
    Setting("skip", PropKey.SKIP, _B),
    Setting("profile", PropKey.PROFILE, _S),
    Setting("namespace", PropKey.NAMESPACE, _S),
    Setting("use_project_class_path", PropKey.USE_PROJECT_CLASS_PATH, _B),
    Setting("work_directory", PropKey.WORK_DIR, _P),
    # Image build
    Setting("filter", PropKey.IMAGE_FILTER, _S),
    Setting("max_connections", PropKey.DOCKER_MAX_CONNECTIONS, _I),
    Setting("api_version", PropKey.DOCKER_API_VERSION, _S),
    Setting("minimal_api_version", PropKey.DOCKER_MINIMAL_API_VERSION, _S),
    Setting("image_pull_policy", PropKey.DOCKER_IMAGE_PULL_POLICY, _S),
    Setting("auto_pull", PropKey.DOCKER_AUTO_PULL, _S),
    Setting("docker_host", PropKey.DOCKER_HOST, _S),
    Setting("cert_path", PropKey.DOCKER_CERT_PATH, _S),
    Setting("skip_machine", PropKey.DOCKER_SKIP_MACHINE, _B),
    Setting("skip_extended_auth", PropKey.DOCKER_SKIP_EXTENDED_AUTH, _B),
    Setting("force_pull", PropKey.BUILD_FORCE_PULL, _B),
    Setting("build_recreate", PropKey.BUILD_RECREATE, _S),
    Setting("build_source_directory", PropKey.BUILD_SOURCE_DIR, _S),
    Setting("build_output_directory", PropKey.BUILD_TARGET_DIR, _S),
    # Registries and push
    Setting("registry", PropKey.DOCKER_REGISTRY, _S),
    Setting("pull_registry", PropKey.DOCKER_PULL_REGISTRY, _S),
    Setting("push_registry", PropKey.DOCKER_PUSH_REGISTRY, _S),
    Setting("skip_push", PropKey.SKIP_PUSH, _B),
    Setting("skip_tag", PropKey.SKIP_TAG, _B),
    Setting("push_retries", PropKey.DOCKER_PUSH_RETRIES, _I),
    # Resource generation
    Setting("resource_source_directory", PropKey.RESOURCE_DIR, _P),
    Setting("resource_target_directory", PropKey.TARGET_DIR, _P),
    Setting("resource_environment", PropKey.RESOURCE_ENVIRONMENT, _S),
    Setting("skip_resource_validation", PropKey.SKIP_RESOURCE_VALIDATION, _B),
    Setting("fail_on_validation_error", PropKey.FAIL_ON_VALIDATION_ERROR, _B),
    Setting("merge_with_dekorate", PropKey.MERGE_WITH_DEKORATE, _B),
    Setting("interpolate_template_parameters", PropKey.INTERPOLATE_TEMPLATE_PARAMETERS, _B),
    # Apply / deploy
    Setting("kubernetes_manifest", PropKey.KUBERNETES_MANIFEST, _P),
    Setting("recreate", PropKey.RECREATE, _B),
    Setting("skip_apply", PropKey.SKIP_APPLY, _B),
    Setting("create_new_resources", PropKey.CREATE_NEW_RESOURCES, _B),
    Setting("rolling_upgrades", PropKey.ROLLING_UPGRADES, _B),
    Setting("rolling_upgrade_preserve_scale", PropKey.ROLLING_UPGRADE_PRESERVE_SCALE, _B),
    Setting("fail_on_no_kubernetes_json", PropKey.FAIL_ON_NO_KUBERNETES_JSON, _B),
    Setting("services_only", PropKey.SERVICES_ONLY, _B),
    Setting("ignore_services", PropKey.IGNORE_SERVICES, _B),
    Setting("json_log_dir", PropKey.JSON_LOG_DIR, _P),
    Setting(
        "delete_pods_on_replication_controller_update",
        PropKey.DELETE_PODS,
        _B,
    ),
    Setting("ignore_running_oauth_clients", PropKey.IGNORE_RUNNING_OAUTH_CLIENTS, _B),
    Setting("process_templates_locally", PropKey.PROCESS_TEMPLATES_LOCALLY, _B),
    Setting("service_url_wait_time_seconds", PropKey.SERVICE_URL_WAIT_SECONDS, _I),
    # Logs
    Setting("log_follow", PropKey.LOG_FOLLOW, _B),
    Setting("log_pod_name", PropKey.LOG_POD_NAME, _S),
    Setting("log_container_name", PropKey.LOG_CONTAINER_NAME, _S),
)

SETTINGS_BY_NAME: Final[Mapping[str, Setting]] = {s.name: s for s in SETTINGS}
