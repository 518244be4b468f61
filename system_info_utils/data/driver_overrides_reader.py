"""
Reduce a driver overrides document to the settings the user modified.

The document is a tree of components, structures and settings. Each chunk
version has a setting filter in ``SETTING_FILTERS``; a newer filter starts
from the rules of its predecessor and layers its own on top. The walk over
the tree is shared by every version.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Tuple

from system_info_utils.data import definitions as keys
from system_info_utils.data.system_info_reader import DocumentText, load_document
from system_info_utils.domain.json_utils import get_node, get_value, has_node, iter_nodes
from system_info_utils.domain.models import (
    DriverOverridesDocument,
    OverridesComponent,
    OverridesStructure,
)
from system_info_utils.errors import UnsupportedVersionError

logger = logging.getLogger(__name__)

SettingFilter = Callable[[Dict[str, Any]], bool]


def is_user_override_v2(setting: Dict[str, Any]) -> bool:
    """Version 2 flags a modified setting with a top level ``UserOverride``."""
    return get_value(setting, keys.OVERRIDES_USER_OVERRIDE, False)


def is_user_override_v3(setting: Dict[str, Any]) -> bool:
    """
    Version 3 keeps the flag next to the value under ``Current`` and marks
    settings the driver cannot apply with ``"Supported": false``.
    """
    if not get_value(setting, keys.OVERRIDES_SUPPORTED, True):
        return False
    if is_user_override_v2(setting):
        return True
    return get_value(get_node(setting, keys.OVERRIDES_CURRENT), keys.OVERRIDES_USER_OVERRIDE, False)


SETTING_FILTERS: Dict[int, SettingFilter] = {
    2: is_user_override_v2,
    3: is_user_override_v3,
}


def create_setting_filter(version: int) -> SettingFilter:
    """
    Select the setting filter for a chunk version.

    Raises:
        UnsupportedVersionError: The version is outside the supported range.
    """
    if not keys.DRIVER_OVERRIDES_CHUNK_VERSION_MIN <= version <= keys.DRIVER_OVERRIDES_CHUNK_VERSION_MAX:
        raise UnsupportedVersionError(version, kind="driver overrides")

    setting_filter = SETTING_FILTERS.get(version)
    if setting_filter is None:
        raise UnsupportedVersionError(version, kind="driver overrides")
    return setting_filter


def _filter_settings(structure_node: Any, setting_filter: SettingFilter) -> List[Dict[str, Any]]:
    return [
        setting
        for setting in iter_nodes(get_node(structure_node, keys.OVERRIDES_SETTINGS))
        if isinstance(setting, dict) and setting_filter(setting)
    ]


def _filter_component(component_node: Any, setting_filter: SettingFilter) -> OverridesComponent:
    component = OverridesComponent(component=get_value(component_node, keys.OVERRIDES_COMPONENT, ""))

    for structure_node in iter_nodes(get_node(component_node, keys.OVERRIDES_STRUCTURES)):
        settings = _filter_settings(structure_node, setting_filter)
        if not settings:
            continue

        structure_name = get_value(structure_node, keys.OVERRIDES_STRUCTURE, "")
        component.structures.append(
            OverridesStructure(
                structure=structure_name or keys.DRIVER_OVERRIDES_MISC_STRUCTURE,
                settings=settings,
            )
        )
    return component


def filter_driver_overrides(structure: Any, version: int) -> DriverOverridesDocument:
    """
    Build the filtered overrides tree for a parsed document.

    Structures without any modified setting and components without any
    remaining structure are dropped.

    Raises:
        UnsupportedVersionError: The version is outside the supported range.
        ValueError: The document root is not a JSON object.
    """
    setting_filter = create_setting_filter(version)
    if not isinstance(structure, dict):
        raise ValueError("Driver overrides document is not a JSON object")

    document = DriverOverridesDocument(
        is_driver_experiments=get_value(structure, keys.OVERRIDES_IS_DRIVER_EXPERIMENTS, False),
    )
    if has_node(structure, keys.OVERRIDES_COMPONENTS):
        for component_node in iter_nodes(structure[keys.OVERRIDES_COMPONENTS]):
            component = _filter_component(component_node, setting_filter)
            if component.structures:
                document.components.append(component)

    logger.debug(f"Driver overrides v{version}: kept {len(document.components)} component(s)")
    return document


def decode_driver_overrides(text: DocumentText, version: int) -> Tuple[str, bool]:
    """
    Decode a driver overrides document of the given chunk version.

    Returns:
        The filtered tree as JSON text and True, or "" and False when the
        version is unsupported or the document is malformed.
    """
    try:
        chunk_version = int(version)
        structure = load_document(text)
        document = filter_driver_overrides(structure, chunk_version)
        return document.model_dump_json(by_alias=True), True
    except UnsupportedVersionError as e:
        logger.warning(f"Cannot decode driver overrides: {e}")
    except ValueError as e:
        logger.error(f"Malformed driver overrides document: {e}")
    except Exception as e:
        logger.error(f"Failed to decode driver overrides: {e}", exc_info=True)
    return "", False
