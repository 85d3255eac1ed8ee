# -*- coding: utf-8 -*-
"""PayloadBuilder: one notification payload per surface for a (brew, stage) pair.

Every surface embeds the same string-only core record (transport data maps
carry strings only). The builder is pure: no clock reads, no I/O, and
identical input always serializes to identical output.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from first_crack.actions import ActionId, ActionRegistry, is_valid_brew_id
from first_crack.exceptions import InvalidBrewId, InvalidStageData
from first_crack.payloads.types import PlatformPayload, PushSurface, StagePayloadSet
from first_crack.timeline import NATIVE_MAX_ACTIONS, StageEntry, StageId

if TYPE_CHECKING:
    from first_crack.config import BrewSettings
    from first_crack.models import BrewContext

NO_ACTION_CATEGORY = "BREW_HEATING"

CATEGORY_BY_STAGE: Mapping[StageId, str] = {
    StageId.HEATING: "BREW_HEATING",
    StageId.GRINDING: "BREW_GRINDING",
    StageId.PRE_INFUSION: "BREW_PREINFUSION",
    StageId.BREWING: "BREW_EXTRACTION",
    StageId.COMPLETE: "BREW_COMPLETE",
}


def category_for(stage_id: object) -> str:
    """Return the action-set category for a stage; unknown stages get the no-action category."""
    if isinstance(stage_id, StageId):
        return CATEGORY_BY_STAGE.get(stage_id, NO_ACTION_CATEGORY)
    parsed = StageId.parse(stage_id) if isinstance(stage_id, str) else None
    if parsed is None:
        return NO_ACTION_CATEGORY
    return CATEGORY_BY_STAGE.get(parsed, NO_ACTION_CATEGORY)


def number_to_str(value: float | int) -> str:
    """Stringify a number without precision loss; integral floats drop the ".0"."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {type(value).__name__}")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PayloadBuilder:
    """Builds StagePayloadSet values for the android, apns and web surfaces."""

    def __init__(
        self,
        registry: ActionRegistry,
        settings: BrewSettings,
        *,
        total_duration_seconds: int,
    ) -> None:
        """Initialize the builder.

        Args:
            registry: Action registry (deep links and button metadata).
            settings: Brew settings (media base URL, action caps, channel/icon names).
            total_duration_seconds: Timeline length, used for remainingTime.
        """
        self._registry = registry
        self._media_base_url = settings.media_base_url.rstrip("/")
        self._native_max_actions = min(settings.native_max_actions, NATIVE_MAX_ACTIONS)
        self._web_max_actions = settings.web_max_actions
        self._android_channel_id = settings.android_channel_id
        self._web_icon = settings.web_icon
        self._web_badge = settings.web_badge
        self._total_duration_seconds = total_duration_seconds

    def build(self, context: BrewContext, stage: StageEntry) -> StagePayloadSet:
        """Build every surface payload for the stage.

        Raises:
            InvalidStageData: If the stage/context pair is malformed. No payload
                is produced for any surface.
        """
        self._validate(context, stage)
        try:
            default_link = self._registry.deep_link_for(ActionId.DEFAULT, context.brew_id)
            buttons = self._encode_actions(stage.actions[: self._native_max_actions], context.brew_id)
            category = category_for(stage.stage_id)
            core = self._core_record(context, stage, category, default_link, buttons)
        except (InvalidBrewId, TypeError) as exc:
            raise InvalidStageData(str(exc), stage=stage.stage_id.value) from exc

        return StagePayloadSet(
            stage=stage.stage_id.value,
            brew_id=context.brew_id,
            category=category,
            core=core,
            payloads=(
                PlatformPayload(PushSurface.ANDROID, self._android(context, stage, core)),
                PlatformPayload(PushSurface.APNS, self._apns(context, stage, core, category)),
                PlatformPayload(PushSurface.WEB, self._web(context, stage, core, buttons, default_link)),
            ),
        )

    def _validate(self, context: BrewContext, stage: StageEntry) -> None:
        if not isinstance(stage.stage_id, StageId):
            raise InvalidStageData(f"Unknown stage id: {stage.stage_id!r}")
        stage_name = stage.stage_id.value
        if not is_valid_brew_id(context.brew_id):
            raise InvalidStageData(f"Invalid brew id: {context.brew_id!r}", stage=stage_name)
        if not stage.title or not stage.title.strip():
            raise InvalidStageData("Stage title is empty", stage=stage_name)
        if not stage.body or not stage.body.strip():
            raise InvalidStageData("Stage body is empty", stage=stage_name)
        if stage.offset_seconds < 0:
            raise InvalidStageData("Stage offset is negative", stage=stage_name)
        if stage.progress is not None and not 0 <= stage.progress <= 100:
            raise InvalidStageData(f"Progress {stage.progress} outside 0..100", stage=stage_name)
        for action in stage.actions:
            if not isinstance(action, ActionId) or action is ActionId.DEFAULT:
                raise InvalidStageData(f"Invalid stage action: {action!r}", stage=stage_name)
        if len(set(stage.actions)) != len(stage.actions):
            raise InvalidStageData("Duplicate stage action", stage=stage_name)

    def _media_url(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._media_base_url}/{path.lstrip('/')}"

    def _encode_actions(self, actions: tuple[ActionId, ...], brew_id: str) -> list[dict[str, Any]]:
        """Encode buttons as {id, title, icon?, requiresForeground?, deepLink?}."""
        encoded: list[dict[str, Any]] = []
        for action in actions:
            spec = self._registry.spec(action)
            button: dict[str, Any] = {"id": spec.wire_id, "title": spec.title}
            if spec.icon:
                button["icon"] = spec.icon
            button["requiresForeground"] = spec.requires_foreground
            button["deepLink"] = self._registry.deep_link_for(action, brew_id)
            encoded.append(button)
        return encoded

    def _core_record(
        self,
        context: BrewContext,
        stage: StageEntry,
        category: str,
        default_link: str,
        buttons: list[dict[str, Any]],
    ) -> dict[str, str]:
        core: dict[str, str] = {
            "type": "brew_complete" if stage.stage_id is StageId.COMPLETE else "brew_stage",
            "stage": stage.stage_id.value,
            "category": category,
            "brewId": context.brew_id,
            "title": stage.title,
            "body": stage.body,
            "brewType": context.brew_type.value,
            "dose": number_to_str(context.dose_grams),
            "temperature": number_to_str(context.target_temp_c),
            "pressure": number_to_str(context.target_pressure_bar),
            "preinfusionTime": number_to_str(context.preinfusion_seconds),
            "extractionTime": number_to_str(context.extraction_seconds),
            "elapsedTime": str(stage.offset_seconds),
            "deepLink": default_link,
        }
        remaining = self._total_duration_seconds - stage.offset_seconds
        if remaining > 0:
            core["remainingTime"] = str(remaining)
        if stage.progress is not None:
            core["progress"] = str(stage.progress)
        image_url = self._media_url(stage.media.image_path)
        if image_url:
            core["imageUrl"] = image_url
        video_url = self._media_url(stage.media.video_path)
        if video_url:
            core["videoUrl"] = video_url
        if buttons:
            core["actions"] = json.dumps(buttons, separators=(",", ":"), ensure_ascii=False)
        return core

    def _android(self, context: BrewContext, stage: StageEntry, core: dict[str, str]) -> dict[str, Any]:
        notification: dict[str, Any] = {
            "title": stage.title,
            "body": stage.body,
            "channel_id": self._android_channel_id,
            "tag": f"brew_{context.brew_id}",
            "sound": "default",
        }
        if "imageUrl" in core:
            notification["image"] = core["imageUrl"]
        return {
            "priority": "high" if stage.high_priority else "normal",
            "collapse_key": context.brew_id,
            "notification": notification,
            "data": dict(core),
        }

    def _apns(
        self,
        context: BrewContext,
        stage: StageEntry,
        core: dict[str, str],
        category: str,
    ) -> dict[str, Any]:
        aps: dict[str, Any] = {
            "alert": {"title": stage.title, "body": stage.body},
            "sound": "default",
            "badge": 1,
            # Lets the service extension attach media before display.
            "mutable-content": 1,
            "thread-id": context.brew_id,
        }
        if stage.actions:
            aps["category"] = category
        return {
            "headers": {
                "apns-priority": "10" if stage.high_priority else "5",
                "apns-push-type": "alert",
                "apns-collapse-id": context.brew_id,
            },
            "payload": {"aps": aps, **core},
        }

    def _web(
        self,
        context: BrewContext,
        stage: StageEntry,
        core: dict[str, str],
        buttons: list[dict[str, Any]],
        default_link: str,
    ) -> dict[str, Any]:
        notification: dict[str, Any] = {
            "title": stage.title,
            "body": stage.body,
            "icon": self._web_icon,
            "badge": self._web_badge,
            "tag": context.brew_id,
            "renotify": True,
            "requireInteraction": stage.require_interaction,
        }
        if "imageUrl" in core:
            notification["image"] = core["imageUrl"]
        if buttons:
            notification["actions"] = [
                _web_action(button) for button in buttons[: self._web_max_actions]
            ]
        return {
            "headers": {"Urgency": "high" if stage.high_priority else "normal"},
            "notification": notification,
            "data": dict(core),
            "fcm_options": {"link": default_link},
        }


def _web_action(button: Mapping[str, Any]) -> dict[str, str]:
    """Map an encoded button to the Notification API action shape."""
    action = {"action": button["id"], "title": button["title"]}
    if button.get("icon"):
        action["icon"] = button["icon"]
    return action
