# topmark:header:start
#
#   project      : DeployKit
#   file         : extension.py
#   file_relpath : src/deploykit/config/extension.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ``kubernetes`` extension root.

`KubernetesExtension` aggregates every scalar setting and structured
sub-configuration of a deployment build. It is created once per invocation,
filled in a single pass by the block evaluator
([`deploykit.config.dsl.evaluate_block`][deploykit.config.dsl.evaluate_block]),
and read afterwards by build and deploy orchestration.

Scalar settings:
    One ``<name>_or_default()`` accessor per setting resolves the effective
    value with the three-tier rule of [`deploykit.config.resolve`][]: project
    property, then declared value, then default. Values are declared through
    `KubernetesExtension.declare`.

Build strategy and resource file type:
    Plain fields (`build_strategy`, `resource_file_type`) consulted after the
    property only; they bypass the declared-value store.

Structured blocks:
    ``configure_<field>(block)`` binds a block and replaces the field. The
    repeatable collections (``images``, ``mappings``) also offer
    ``add_image(block)`` / ``add_mapping(block)``, which append. A later
    ``configure_images`` discards images added before it.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from deploykit.config.binding import bind_block, bind_block_list, bind_block_map, is_block
from deploykit.config.cluster import OpenShiftProbe
from deploykit.config.errors import BindingError
from deploykit.config.keys import PropKey, Toml
from deploykit.config.logging import get_logger
from deploykit.config.model import (
    ClusterConfiguration,
    ImageConfiguration,
    MachineConfiguration,
    MappingConfig,
    ProcessorConfig,
    RegistryAuthConfiguration,
    ResourceConfig,
)
from deploykit.config.resolve import (
    resolve_bool,
    resolve_enum,
    resolve_int,
    resolve_path,
    resolve_str,
)
from deploykit.config.settings import SETTINGS, SETTINGS_BY_NAME, SettingKind
from deploykit.config.types import (
    BuildStrategy,
    PlatformMode,
    ResourceClassifier,
    ResourceFileType,
    RuntimeMode,
)

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from deploykit.config.binding import B
    from deploykit.config.cluster import ClusterProbe
    from deploykit.config.logging import DeployKitLogger
    from deploykit.config.project import ProjectContext
    from deploykit.config.settings import Setting

logger: DeployKitLogger = get_logger(__name__)

DEFAULT_MAX_CONNECTIONS: Final[int] = 100
DEFAULT_REGISTRY: Final[str] = "docker.io"
DEFAULT_KUBERNETES_MANIFEST: Final[Path] = Path("META-INF", "deploykit", "kubernetes.yml")
DEFAULT_JSON_LOG_DIR: Final[Path] = Path("deploykit", "applyJson")
DEFAULT_RESOURCE_SOURCE_DIR: Final[Path] = Path("src", "main", "deploykit")
DEFAULT_RESOURCE_TARGET_DIR: Final[Path] = Path("META-INF", "deploykit")
DEFAULT_WORK_DIR: Final[str] = "deploykit"


class KubernetesExtension:
    """Configuration root of the ``kubernetes`` block.

    Args:
        project (ProjectContext): Project directories and property overrides.

    Attributes:
        project (ProjectContext): The project this extension configures.
        build_strategy (BuildStrategy | None): Plain field; see `build_strategy_or_default`.
        resource_file_type (ResourceFileType | None): Plain field; see
            `resource_file_type_or_default`.
        access (ClusterConfiguration | None): Cluster access settings.
        resources (ResourceConfig | None): Resource generation settings.
        enricher (ProcessorConfig | None): Enricher include/exclude rules.
        generator (ProcessorConfig | None): Generator include/exclude rules.
        images (list[ImageConfiguration] | None): Images to build; None until declared.
        machine (MachineConfiguration | None): Docker machine settings.
        auth_config (RegistryAuthConfiguration | None): Registry credentials.
        mappings (list[MappingConfig] | None): Resource fragment mappings; None until declared.
    """

    runtime_mode: Final[RuntimeMode] = RuntimeMode.KUBERNETES
    platform_mode: Final[PlatformMode] = PlatformMode.kubernetes
    resource_classifier: Final[ResourceClassifier] = ResourceClassifier.KUBERNETES
    supports_oauth_clients: Final[bool] = False

    def __init__(self, project: ProjectContext) -> None:
        self.project = project
        self._declared: dict[str, Any] = {}

        self.build_strategy: BuildStrategy | None = None
        self.resource_file_type: ResourceFileType | None = None

        self.access: ClusterConfiguration | None = None
        self.resources: ResourceConfig | None = None
        self.enricher: ProcessorConfig | None = None
        self.generator: ProcessorConfig | None = None
        self.images: list[ImageConfiguration] | None = None
        self.machine: MachineConfiguration | None = None
        self.auth_config: RegistryAuthConfiguration | None = None
        self.mappings: list[MappingConfig] | None = None

    # ------------------ Declared values ------------------

    @property
    def declared(self) -> Mapping[str, Any]:
        """Read-only view of the values assigned by the block, keyed by setting name."""
        return MappingProxyType(self._declared)

    def declare(self, name: str, value: Any, *, relative_to: Path | None = None) -> None:
        """Assign the declared value of a scalar setting.

        Args:
            name (str): Setting name (block key), e.g. ``"namespace"``.
            value (Any): Value of the setting's kind.
            relative_to (Path | None): Directory anchoring a relative path value,
                usually the directory of the declaring config file.

        Raises:
            BindingError: If ``name`` is not a setting or ``value`` has the wrong type.
        """
        where: str = f"{Toml.SECTION_KUBERNETES}.{name}"
        setting: Setting | None = SETTINGS_BY_NAME.get(name)
        if setting is None:
            raise BindingError.for_unknown_fields(
                Toml.SECTION_KUBERNETES, [name], list(SETTINGS_BY_NAME)
            )
        converted: Any = setting.kind.converter(value, where)
        if setting.kind is SettingKind.PATH and relative_to is not None:
            if not converted.is_absolute():
                converted = relative_to / converted
        self._declared[name] = converted
        logger.debug("Declared %s = %r", where, converted)

    # ------------------ Structured blocks ------------------

    def configure_access(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.access]`` and replace the cluster access settings."""
        self.access = self._bind(block, ClusterConfiguration, Toml.KEY_ACCESS)

    def configure_resources(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.resources]`` and replace the resource settings."""
        self.resources = self._bind(block, ResourceConfig, Toml.KEY_RESOURCES)

    def configure_enricher(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.enricher]`` and replace the enricher rules."""
        self.enricher = self._bind(block, ProcessorConfig, Toml.KEY_ENRICHER)

    def configure_generator(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.generator]`` and replace the generator rules."""
        self.generator = self._bind(block, ProcessorConfig, Toml.KEY_GENERATOR)

    def configure_machine(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.machine]`` and replace the docker machine settings."""
        self.machine = self._bind(block, MachineConfiguration, Toml.KEY_MACHINE)

    def configure_auth_config(self, block: Mapping[str, Any]) -> None:
        """Bind ``[kubernetes.auth_config]`` and replace the registry credentials."""
        self.auth_config = self._bind(block, RegistryAuthConfiguration, Toml.KEY_AUTH_CONFIG)

    def configure_images(self, blocks: object) -> None:
        """Replace all images.

        Args:
            blocks (object): Either a table of named image blocks
                (``[kubernetes.images.app]``) or a list of image blocks
                (``[[kubernetes.images]]``). Both keep declaration order.
        """
        self.images = self._bind_many(blocks, ImageConfiguration, Toml.KEY_IMAGES)

    def add_image(self, block: Mapping[str, Any]) -> None:
        """Bind one image block and append it, creating the image list if unset."""
        image: ImageConfiguration = self._bind(block, ImageConfiguration, Toml.KEY_IMAGE)
        if self.images is None:
            self.images = []
        self.images.append(image)

    def configure_mappings(self, blocks: object) -> None:
        """Replace all mappings; accepts the same shapes as `configure_images`."""
        self.mappings = self._bind_many(blocks, MappingConfig, Toml.KEY_MAPPINGS)

    def add_mapping(self, block: Mapping[str, Any]) -> None:
        """Bind one mapping block and append it, creating the mapping list if unset."""
        mapping: MappingConfig = self._bind(block, MappingConfig, Toml.KEY_MAPPING)
        if self.mappings is None:
            self.mappings = []
        self.mappings.append(mapping)

    @staticmethod
    def _bind(block: object, cls: type[B], key: str) -> B:
        return bind_block(block, cls, path=f"{Toml.SECTION_KUBERNETES}.{key}")

    @staticmethod
    def _bind_many(blocks: object, cls: type[B], key: str) -> list[B]:
        path: str = f"{Toml.SECTION_KUBERNETES}.{key}"
        if is_block(blocks):
            return bind_block_map(blocks, cls, path=path)
        return bind_block_list(blocks, cls, path=path)

    # ------------------ Resolution helpers ------------------

    def _bool(self, name: str, default: bool) -> bool:
        return resolve_bool(
            self.project.properties, SETTINGS_BY_NAME[name].key, self._declared.get(name), default
        )

    def _int(self, name: str, default: int) -> int:
        return resolve_int(
            self.project.properties, SETTINGS_BY_NAME[name].key, self._declared.get(name), default
        )

    def _str(self, name: str, default: str | None) -> str | None:
        return resolve_str(
            self.project.properties, SETTINGS_BY_NAME[name].key, self._declared.get(name), default
        )

    def _path(self, name: str, default: Path) -> Path:
        return resolve_path(
            self.project.properties,
            SETTINGS_BY_NAME[name].key,
            self._declared.get(name),
            default,
            base_directory=self.project.base_directory,
        )

    # ------------------ General ------------------

    def offline_or_default(self) -> bool:
        """Resolve ``deploykit.offline``; defaults to ``False``."""
        return self._bool("offline", False)

    def use_color_or_default(self) -> bool:
        """Resolve ``deploykit.useColor``; defaults to ``True``."""
        return self._bool("use_color", True)

    def skip_or_default(self) -> bool:
        """Resolve ``deploykit.skip``; defaults to ``False``."""
        return self._bool("skip", False)

    def profile_or_default(self) -> str | None:
        """Resolve ``deploykit.profile``; unset by default."""
        return self._str("profile", None)

    def namespace_or_default(self) -> str | None:
        """Resolve ``deploykit.namespace``; unset by default."""
        return self._str("namespace", None)

    def use_project_class_path_or_default(self) -> bool:
        """Resolve ``deploykit.useProjectClasspath``; defaults to ``False``."""
        return self._bool("use_project_class_path", False)

    def work_directory_or_default(self) -> Path:
        """Resolve ``deploykit.workDir``; defaults to ``<build>/deploykit``."""
        return self._path("work_directory", self.project.build_directory / DEFAULT_WORK_DIR)

    # ------------------ Image build ------------------

    def filter_or_default(self) -> str | None:
        """Resolve ``deploykit.image.filter``; unset by default."""
        return self._str("filter", None)

    def max_connections_or_default(self) -> int:
        """Resolve ``deploykit.docker.maxConnections``; defaults to ``100``."""
        return self._int("max_connections", DEFAULT_MAX_CONNECTIONS)

    def api_version_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.apiVersion``; unset by default."""
        return self._str("api_version", None)

    def minimal_api_version_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.minimalApiVersion``; unset by default."""
        return self._str("minimal_api_version", None)

    def image_pull_policy_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.imagePullPolicy``; unset by default."""
        return self._str("image_pull_policy", None)

    def auto_pull_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.autoPull``; unset by default."""
        return self._str("auto_pull", None)

    def docker_host_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.host``; unset by default."""
        return self._str("docker_host", None)

    def cert_path_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.certPath``; unset by default."""
        return self._str("cert_path", None)

    def skip_machine_or_default(self) -> bool:
        """Resolve ``deploykit.docker.skip.machine``; defaults to ``False``."""
        return self._bool("skip_machine", False)

    def skip_extended_auth_or_default(self) -> bool:
        """Resolve ``deploykit.docker.skip.extendedAuth``; defaults to ``False``."""
        return self._bool("skip_extended_auth", False)

    def force_pull_or_default(self) -> bool:
        """Resolve ``deploykit.build.forcePull``; defaults to ``False``."""
        return self._bool("force_pull", False)

    def build_recreate_or_default(self) -> str | None:
        """Resolve ``deploykit.build.recreate``; defaults to ``"none"``."""
        return self._str("build_recreate", "none")

    def build_source_directory_or_default(self) -> str | None:
        """Resolve ``deploykit.build.source.dir``; defaults to ``"src/main/docker"``."""
        return self._str("build_source_directory", "src/main/docker")

    def build_output_directory_or_default(self) -> str | None:
        """Resolve ``deploykit.build.target.dir``; defaults to ``"build/docker"``."""
        return self._str("build_output_directory", "build/docker")

    # ------------------ Registries and push ------------------

    def registry_or_default(self) -> str | None:
        """Resolve ``deploykit.docker.registry``; defaults to ``"docker.io"``."""
        return self._str("registry", DEFAULT_REGISTRY)

    def pull_registry_or_default(self) -> str | None:
        """Registry to pull base images from; defaults to the resolved `registry_or_default`."""
        return self._str("pull_registry", self.registry_or_default())

    def push_registry_or_default(self) -> str | None:
        """Registry to push images to; defaults to the resolved `registry_or_default`."""
        return self._str("push_registry", self.registry_or_default())

    def skip_push_or_default(self) -> bool:
        """Resolve ``deploykit.skip.push``; defaults to ``False``."""
        return self._bool("skip_push", False)

    def skip_tag_or_default(self) -> bool:
        """Resolve ``deploykit.skip.tag``; defaults to ``False``."""
        return self._bool("skip_tag", False)

    def push_retries_or_default(self) -> int:
        """Resolve ``deploykit.docker.push.retries``; defaults to ``0``."""
        return self._int("push_retries", 0)

    # ------------------ Resource generation ------------------

    def resource_source_directory_or_default(self) -> Path:
        """Resolve ``deploykit.resourceDir``; defaults to ``<base>/src/main/deploykit``."""
        return self._path(
            "resource_source_directory",
            self.project.base_directory / DEFAULT_RESOURCE_SOURCE_DIR,
        )

    def resource_target_directory_or_default(self) -> Path:
        """Resolve ``deploykit.targetDir``; defaults to ``<output>/META-INF/deploykit``."""
        return self._path(
            "resource_target_directory",
            self.project.output_directory / DEFAULT_RESOURCE_TARGET_DIR,
        )

    def resource_environment_or_default(self) -> str | None:
        """Resolve ``deploykit.environment``; unset by default."""
        return self._str("resource_environment", None)

    def skip_resource_validation_or_default(self) -> bool:
        """Resolve ``deploykit.skipResourceValidation``; defaults to ``False``."""
        return self._bool("skip_resource_validation", False)

    def fail_on_validation_error_or_default(self) -> bool:
        """Resolve ``deploykit.failOnValidationError``; defaults to ``False``."""
        return self._bool("fail_on_validation_error", False)

    def merge_with_dekorate_or_default(self) -> bool:
        """Resolve ``deploykit.mergeWithDekorate``; defaults to ``False``."""
        return self._bool("merge_with_dekorate", False)

    def interpolate_template_parameters_or_default(self) -> bool:
        """Resolve ``deploykit.interpolateTemplateParameters``; defaults to ``True``."""
        return self._bool("interpolate_template_parameters", True)

    # ------------------ Apply / deploy ------------------

    def kubernetes_manifest_or_default(self) -> Path:
        """Resolve ``deploykit.kubernetesManifest``.

        Defaults to ``<output>/META-INF/deploykit/kubernetes.yml``.
        """
        return self._path(
            "kubernetes_manifest",
            self.project.output_directory / DEFAULT_KUBERNETES_MANIFEST,
        )

    def recreate_or_default(self) -> bool:
        """Resolve ``deploykit.recreate``; defaults to ``False``."""
        return self._bool("recreate", False)

    def skip_apply_or_default(self) -> bool:
        """Resolve ``deploykit.skip.apply``; defaults to ``False``."""
        return self._bool("skip_apply", False)

    def create_new_resources_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.create``; defaults to ``True``."""
        return self._bool("create_new_resources", True)

    def rolling_upgrades_or_default(self) -> bool:
        """Resolve ``deploykit.rolling``; defaults to ``False``."""
        return self._bool("rolling_upgrades", False)

    def rolling_upgrade_preserve_scale_or_default(self) -> bool:
        """Resolve ``deploykit.rolling.preserveScale``; defaults to ``False``."""
        return self._bool("rolling_upgrade_preserve_scale", False)

    def fail_on_no_kubernetes_json_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.failOnNoKubernetesJson``; defaults to ``False``."""
        return self._bool("fail_on_no_kubernetes_json", False)

    def services_only_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.servicesOnly``; defaults to ``False``."""
        return self._bool("services_only", False)

    def ignore_services_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.ignoreServices``; defaults to ``False``."""
        return self._bool("ignore_services", False)

    def json_log_dir_or_default(self) -> Path:
        """Resolve ``deploykit.deploy.jsonLogDir``; defaults to ``<build>/deploykit/applyJson``."""
        return self._path("json_log_dir", self.project.build_directory / DEFAULT_JSON_LOG_DIR)

    def delete_pods_on_replication_controller_update_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.deletePods``; defaults to ``True``."""
        return self._bool("delete_pods_on_replication_controller_update", True)

    def ignore_running_oauth_clients_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.ignoreRunningOAuthClients``; defaults to ``True``."""
        return self._bool("ignore_running_oauth_clients", True)

    def process_templates_locally_or_default(self) -> bool:
        """Resolve ``deploykit.deploy.processTemplatesLocally``; defaults to ``True``."""
        return self._bool("process_templates_locally", True)

    def service_url_wait_time_seconds_or_default(self) -> int:
        """Resolve ``deploykit.serviceUrl.waitSeconds``; defaults to ``5``."""
        return self._int("service_url_wait_time_seconds", 5)

    # ------------------ Logs ------------------

    def log_follow_or_default(self) -> bool:
        """Resolve ``deploykit.log.follow``; defaults to ``True``."""
        return self._bool("log_follow", True)

    def log_pod_name_or_default(self) -> str | None:
        """Resolve ``deploykit.log.pod``; unset by default."""
        return self._str("log_pod_name", None)

    def log_container_name_or_default(self) -> str | None:
        """Resolve ``deploykit.log.container``; unset by default."""
        return self._str("log_container_name", None)

    # ------------------ Two-tier settings ------------------

    def get_build_strategy(self) -> BuildStrategy:
        """Return the plain `build_strategy` field, or ``docker`` when unset."""
        return self.build_strategy if self.build_strategy is not None else BuildStrategy.docker

    def build_strategy_or_default(self) -> BuildStrategy:
        """Resolve the build strategy: property ``deploykit.build.strategy``, then the field.

        Raises:
            PropertyParseError: If the property names no `BuildStrategy` member.
        """
        return resolve_enum(
            self.project.properties,
            PropKey.BUILD_STRATEGY,
            BuildStrategy,
            self.get_build_strategy(),
        )

    def get_resource_file_type(self) -> ResourceFileType:
        """Return the plain `resource_file_type` field, or ``yaml`` when unset."""
        if self.resource_file_type is not None:
            return self.resource_file_type
        return ResourceFileType.yaml

    def resource_file_type_or_default(self) -> ResourceFileType:
        """Resolve the resource file type: property ``deploykit.resourceType``, then the field.

        Raises:
            PropertyParseError: If the property names no `ResourceFileType` member.
        """
        return resolve_enum(
            self.project.properties,
            PropKey.RESOURCE_TYPE,
            ResourceFileType,
            self.get_resource_file_type(),
        )

    # ------------------ Derived decisions ------------------

    def is_docker_access_required(self) -> bool:
        """Return False only when images are built with ``jib`` (no daemon needed)."""
        return self.build_strategy_or_default() is not BuildStrategy.jib

    def get_manifest(
        self,
        client: object,
        probe: ClusterProbe | None = None,
        log: logging.Logger | None = None,
    ) -> Path:
        """Select the manifest to apply.

        When ``probe`` reports an incompatible (OpenShift) cluster, two
        warnings are written to ``log``. The returned path is the same either way.

        Args:
            client (object): Cluster client handed to the probe.
            probe (ClusterProbe | None): Cluster-type probe; defaults to `OpenShiftProbe`.
            log (logging.Logger | None): Logger receiving the advisory; defaults to
                this module's logger.

        Returns:
            Path: `kubernetes_manifest_or_default`.
        """
        probe = probe or OpenShiftProbe()
        log = log or logger
        if probe.is_incompatible_cluster_type(client):
            log.warning("OpenShift cluster detected, using Kubernetes manifests")
            log.warning("Switch to the openshift extension in case there are any problems")
        return self.kubernetes_manifest_or_default()

    def effective_settings(self) -> dict[str, Any]:
        """Resolve every setting once, in catalogue order.

        The two-tier settings are appended as ``build_strategy`` and
        ``resource_file_type``.

        Returns:
            dict[str, Any]: Setting name -> effective value.

        Raises:
            PropertyParseError: On the first property that fails to parse.
        """
        out: dict[str, Any] = {s.name: getattr(self, s.accessor)() for s in SETTINGS}
        out[Toml.KEY_BUILD_STRATEGY] = self.build_strategy_or_default()
        out[Toml.KEY_RESOURCE_FILE_TYPE] = self.resource_file_type_or_default()
        return out
