# -*- coding: utf-8 -*-
"""Static brew stage timeline.

Timing (seconds from brew start):
- heating: 0
- grinding: 20
- pre_infusion: 30
- brewing: 45
- complete: 75 (end of extraction, total estimated duration)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from first_crack.actions import ActionId
from first_crack.exceptions import InvalidStageData
from first_crack.timeline.stage import MediaRef, StageEntry, StageId

NATIVE_MAX_ACTIONS = 3


class StageTimeline:
    """Immutable, validated, ordered sequence of StageEntry values.

    Invariants checked at construction:
    - offsets are non-negative and strictly increasing;
    - stage ids are unique and follow lifecycle order;
    - no stage carries more than NATIVE_MAX_ACTIONS actions, and none repeats an action.
    """

    def __init__(self, entries: Iterable[StageEntry]) -> None:
        self._entries: tuple[StageEntry, ...] = tuple(entries)
        self._validate()
        self._by_stage = {entry.stage_id: entry for entry in self._entries}

    def _validate(self) -> None:
        if not self._entries:
            raise InvalidStageData("Timeline must contain at least one stage")
        previous: Optional[StageEntry] = None
        for entry in self._entries:
            stage = entry.stage_id.value
            if entry.offset_seconds < 0:
                raise InvalidStageData(
                    f"Negative offset {entry.offset_seconds}s", stage=stage
                )
            if len(entry.actions) > NATIVE_MAX_ACTIONS:
                raise InvalidStageData(
                    f"{len(entry.actions)} actions exceeds the maximum of {NATIVE_MAX_ACTIONS}",
                    stage=stage,
                )
            if len(set(entry.actions)) != len(entry.actions):
                raise InvalidStageData("Duplicate action in stage", stage=stage)
            if ActionId.DEFAULT in entry.actions:
                raise InvalidStageData("The default action cannot be a button", stage=stage)
            if previous is not None:
                if entry.offset_seconds <= previous.offset_seconds:
                    raise InvalidStageData(
                        f"Offset {entry.offset_seconds}s is not after "
                        f"{previous.stage_id.value} ({previous.offset_seconds}s)",
                        stage=stage,
                    )
                if entry.stage_id <= previous.stage_id:
                    raise InvalidStageData(
                        f"Stage out of lifecycle order after {previous.stage_id.value}",
                        stage=stage,
                    )
            previous = entry

    def __iter__(self) -> Iterator[StageEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    @property
    def entries(self) -> tuple[StageEntry, ...]:
        return self._entries

    @property
    def total_duration_seconds(self) -> int:
        """Offset of the final stage."""
        return self._entries[-1].offset_seconds

    def get(self, stage_id: StageId) -> Optional[StageEntry]:
        return self._by_stage.get(stage_id)


DEFAULT_TIMELINE = StageTimeline(
    [
        StageEntry(
            stage_id=StageId.HEATING,
            offset_seconds=0,
            title="Heating Water",
            body="Your espresso machine is heating to the perfect temperature...",
            media=MediaRef(image_path="/images/heating.png"),
            progress=0,
        ),
        StageEntry(
            stage_id=StageId.GRINDING,
            offset_seconds=20,
            title="Grinding Beans",
            body="Grinding fresh coffee beans to the perfect particle size...",
            media=MediaRef(image_path="/images/grinding.png"),
            actions=(ActionId.PAUSE_GRINDING, ActionId.ADJUST_GRIND),
            progress=30,
        ),
        StageEntry(
            stage_id=StageId.PRE_INFUSION,
            offset_seconds=30,
            title="Pre-infusion",
            body="Gently saturating the coffee puck at 2 bar...",
            media=MediaRef(image_path="/images/pre_infusion.png"),
            actions=(ActionId.SKIP_PREINFUSION, ActionId.EXTEND_PREINFUSION),
            progress=40,
            high_priority=True,
        ),
        StageEntry(
            stage_id=StageId.BREWING,
            offset_seconds=45,
            title="Brewing",
            body="Extracting espresso. Beautiful crema forming...",
            media=MediaRef(
                image_path="/images/brewing.png",
                video_path="/videos/extraction-live.mp4",
            ),
            actions=(ActionId.STOP_SHOT, ActionId.VIEW_LIVE),
            progress=60,
            high_priority=True,
        ),
        StageEntry(
            stage_id=StageId.COMPLETE,
            offset_seconds=75,
            title="Your Espresso is Ready! ☕",
            body="Extraction complete. Enjoy!",
            media=MediaRef(image_path="/images/brew_complete.png"),
            actions=(ActionId.BREW_AGAIN, ActionId.ADJUST_PROFILE, ActionId.SHARE),
            require_interaction=True,
            progress=100,
            high_priority=True,
        ),
    ]
)
