# topmark:header:start
#
#   project      : DeployKit
#   file         : keys.py
#   file_relpath : src/deploykit/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical property keys and TOML block names for DeployKit configuration.

This module defines the authoritative string constants used when resolving
settings from project properties (``-D deploykit.namespace=dev``) and when
reading the ``[kubernetes]`` block from TOML sources (``deploykit.toml`` and
``[tool.deploykit]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing a key is a breaking change.
    - Property keys follow ``<domain>.<setting>``; block keys are snake_case.
"""

from __future__ import annotations

from typing import Final


class PropKey:
    """Property keys consulted first by every setting resolver."""

    OFFLINE: Final[str] = "deploykit.offline"
    USE_PROJECT_CLASS_PATH: Final[str] = "deploykit.useProjectClasspath"
    FAIL_ON_VALIDATION_ERROR: Final[str] = "deploykit.failOnValidationError"
    MERGE_WITH_DEKORATE: Final[str] = "deploykit.mergeWithDekorate"
    INTERPOLATE_TEMPLATE_PARAMETERS: Final[str] = "deploykit.interpolateTemplateParameters"
    SKIP_RESOURCE_VALIDATION: Final[str] = "deploykit.skipResourceValidation"
    LOG_FOLLOW: Final[str] = "deploykit.log.follow"
    LOG_POD_NAME: Final[str] = "deploykit.log.pod"
    LOG_CONTAINER_NAME: Final[str] = "deploykit.log.container"
    RECREATE: Final[str] = "deploykit.recreate"
    SKIP: Final[str] = "deploykit.skip"
    SKIP_APPLY: Final[str] = "deploykit.skip.apply"
    SKIP_PUSH: Final[str] = "deploykit.skip.push"
    SKIP_TAG: Final[str] = "deploykit.skip.tag"
    FAIL_ON_NO_KUBERNETES_JSON: Final[str] = "deploykit.deploy.failOnNoKubernetesJson"
    CREATE_NEW_RESOURCES: Final[str] = "deploykit.deploy.create"
    SERVICES_ONLY: Final[str] = "deploykit.deploy.servicesOnly"
    IGNORE_SERVICES: Final[str] = "deploykit.deploy.ignoreServices"
    JSON_LOG_DIR: Final[str] = "deploykit.deploy.jsonLogDir"
    DELETE_PODS: Final[str] = "deploykit.deploy.deletePods"
    IGNORE_RUNNING_OAUTH_CLIENTS: Final[str] = "deploykit.deploy.ignoreRunningOAuthClients"
    PROCESS_TEMPLATES_LOCALLY: Final[str] = "deploykit.deploy.processTemplatesLocally"
    ROLLING_UPGRADES: Final[str] = "deploykit.rolling"
    ROLLING_UPGRADE_PRESERVE_SCALE: Final[str] = "deploykit.rolling.preserveScale"
    SERVICE_URL_WAIT_SECONDS: Final[str] = "deploykit.serviceUrl.waitSeconds"
    KUBERNETES_MANIFEST: Final[str] = "deploykit.kubernetesManifest"
    USE_COLOR: Final[str] = "deploykit.useColor"
    IMAGE_FILTER: Final[str] = "deploykit.image.filter"

    # Image build / registry access
    DOCKER_MAX_CONNECTIONS: Final[str] = "deploykit.docker.maxConnections"
    DOCKER_API_VERSION: Final[str] = "deploykit.docker.apiVersion"
    DOCKER_MINIMAL_API_VERSION: Final[str] = "deploykit.docker.minimalApiVersion"
    DOCKER_IMAGE_PULL_POLICY: Final[str] = "deploykit.docker.imagePullPolicy"
    DOCKER_AUTO_PULL: Final[str] = "deploykit.docker.autoPull"
    DOCKER_HOST: Final[str] = "deploykit.docker.host"
    DOCKER_CERT_PATH: Final[str] = "deploykit.docker.certPath"
    DOCKER_SKIP_MACHINE: Final[str] = "deploykit.docker.skip.machine"
    DOCKER_SKIP_EXTENDED_AUTH: Final[str] = "deploykit.docker.skip.extendedAuth"
    DOCKER_REGISTRY: Final[str] = "deploykit.docker.registry"
    DOCKER_PULL_REGISTRY: Final[str] = "deploykit.docker.pull.registry"
    DOCKER_PUSH_REGISTRY: Final[str] = "deploykit.docker.push.registry"
    DOCKER_PUSH_RETRIES: Final[str] = "deploykit.docker.push.retries"
    BUILD_FORCE_PULL: Final[str] = "deploykit.build.forcePull"
    BUILD_RECREATE: Final[str] = "deploykit.build.recreate"
    BUILD_SOURCE_DIR: Final[str] = "deploykit.build.source.dir"
    BUILD_TARGET_DIR: Final[str] = "deploykit.build.target.dir"
    BUILD_STRATEGY: Final[str] = "deploykit.build.strategy"

    # Resources
    RESOURCE_DIR: Final[str] = "deploykit.resourceDir"
    TARGET_DIR: Final[str] = "deploykit.targetDir"
    RESOURCE_ENVIRONMENT: Final[str] = "deploykit.environment"
    RESOURCE_TYPE: Final[str] = "deploykit.resourceType"
    WORK_DIR: Final[str] = "deploykit.workDir"
    PROFILE: Final[str] = "deploykit.profile"
    NAMESPACE: Final[str] = "deploykit.namespace"


class Toml:
    """TOML section and key names of the extension block."""

    # deploykit.toml: [kubernetes]; pyproject.toml: [tool.deploykit.kubernetes]
    SECTION_TOOL: Final[str] = "tool"
    SECTION_DEPLOYKIT: Final[str] = "deploykit"
    SECTION_KUBERNETES: Final[str] = "kubernetes"

    # Plain (two-tier) fields
    KEY_BUILD_STRATEGY: Final[str] = "build_strategy"
    KEY_RESOURCE_FILE_TYPE: Final[str] = "resource_file_type"

    # Single structured blocks
    KEY_ACCESS: Final[str] = "access"
    KEY_RESOURCES: Final[str] = "resources"
    KEY_ENRICHER: Final[str] = "enricher"
    KEY_GENERATOR: Final[str] = "generator"
    KEY_MACHINE: Final[str] = "machine"
    KEY_AUTH_CONFIG: Final[str] = "auth_config"

    # Repeatable collections: plural replaces, singular appends
    KEY_IMAGES: Final[str] = "images"
    KEY_IMAGE: Final[str] = "image"
    KEY_MAPPINGS: Final[str] = "mappings"
    KEY_MAPPING: Final[str] = "mapping"
