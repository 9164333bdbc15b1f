from __future__ import annotations
import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from file_model.layout import Layout
from utils.CONSTANT import UTILS_SAVE_DIR

logger = logging.getLogger(__name__)

# TOML file holding the engraving rules used by the contour engine
RULES_PATH: Path = Path(UTILS_SAVE_DIR) / "engraving_rules.toml"

LAYOUT_DESCRIPTIONS: Dict[str, str] = {
    'sampling_unit': "Contour samples per staff space (horizontal resolution of sky/bottom lines)",
    'staff_height': "Staff height in staff spaces; bottom line values beyond it extend below the staff",
    'render_skyline': "Draw the skyline in debug renders",
    'render_bottomline': "Draw the bottomline in debug renders",
    'render_measure_borders': "Draw dashed measure borders in debug renders",
    'skyline_color': "Hex color of the rendered skyline",
    'bottomline_color': "Hex color of the rendered bottomline",
    'measure_border_color': "Hex color of the rendered measure borders",
    'contour_line_width_mm': "Stroke width of rendered contours (mm)",
    'staff_line_thickness_mm': "Stroke width of rendered staff lines (mm)",
    'px_per_staff_space': "Device units per staff space in debug renders",
    'render_padding_staff_spaces': "[above, below] canvas padding around the staff in staff spaces",
}


@dataclass
class _RuleDef:
    default: object
    description: str


class RulesManager:
    """Register and persist engraving rules in ~/.skybottom/engraving_rules.toml.

    Values are read with tomllib and written back with tomlkit so comments
    and ordering a user added by hand survive a save.
    """

    def __init__(self, path: Path = RULES_PATH) -> None:
        self.path = Path(path)
        self._schema: Dict[str, _RuleDef] = {}
        self._values: Dict[str, object] = {}
        # Parsed TOML document for round-trip preservation
        self._doc: Optional[tomlkit.TOMLDocument] = None

    def register(self, key: str, default: object, description: str) -> None:
        self._schema[key] = _RuleDef(default=default, description=description)
        if key not in self._values:
            self._values[key] = default

    def get(self, key: str, default: Optional[object] = None) -> object:
        return self._values.get(key, default)

    def set(self, key: str, value: object) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def _ensure_dir(self) -> None:
        os.makedirs(self.path.parent, exist_ok=True)

    def load(self) -> None:
        self._ensure_dir()
        parsed: Dict[str, object] = {}
        changed: bool = False
        if self.path.exists():
            text = self.path.read_text(encoding="utf-8")
            try:
                parsed = dict(tomllib.loads(text))
                self._doc = tomlkit.parse(text)
            except (tomllib.TOMLDecodeError, TOMLKitError) as exc:
                logger.warning("Malformed rules file %s (%s); using defaults", self.path, exc)
                parsed = {}
                self._doc = None
                changed = True
        else:
            # Initialize defaults and write TOML file
            self.save()

        # Merge loaded values into schema defaults
        for k, d in self._schema.items():
            if k in parsed:
                self._values[k] = parsed[k]
            else:
                self._values.setdefault(k, d.default)
                changed = True
        for k, v in parsed.items():
            if k not in self._values:
                self._values[k] = v

        # Persist restored defaults if any schema keys were missing
        if changed:
            self.save()

    def save(self) -> None:
        self._ensure_dir()
        if self._doc is None:
            self._doc = self._new_document()
        for k, v in self._values.items():
            if k in self._doc:
                self._doc[k] = v
            else:
                self._doc.add(k, v)
        self.path.write_text(tomlkit.dumps(self._doc), encoding="utf-8")

    def _new_document(self) -> tomlkit.TOMLDocument:
        doc = tomlkit.document()
        doc.add(tomlkit.comment("Engraving rules for the skyline/bottomline engine (TOML)"))
        doc.add(tomlkit.nl())
        for k, d in self._schema.items():
            for dline in d.description.splitlines():
                doc.add(tomlkit.comment(dline))
            doc.add(k, self._values.get(k, d.default))
        return doc

    # ---- layout bridge ----
    def layout(self) -> Layout:
        return Layout.from_dict(self._values)

    def store_layout(self, layout: Layout) -> None:
        for k, v in layout.to_dict().items():
            self.set(k, v)


# ---- Registration hub (every Layout field is a rule) ----
_rules_manager: Optional[RulesManager] = None


def register_layout_rules(manager: RulesManager) -> RulesManager:
    defaults = Layout()
    for f in fields(Layout):
        manager.register(f.name, getattr(defaults, f.name), LAYOUT_DESCRIPTIONS.get(f.name, ""))
    return manager


def get_rules_manager(path: Optional[Path] = None) -> RulesManager:
    global _rules_manager
    if _rules_manager is None or (path is not None and Path(path) != _rules_manager.path):
        rm = register_layout_rules(RulesManager(RULES_PATH if path is None else Path(path)))
        rm.load()
        _rules_manager = rm
    return _rules_manager
