"""Plant fields prompted for by the update flow, grouped by section."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

TODAY = "today"

DEVELOPMENT_STAGE_KEY = "DEVELOPMENT_STAGE"

DEVELOPMENT_STAGES = (
    "Seed",
    "Germination",
    "Seedling/Sprout",
    "Vegetative Growth",
    "Budding",
    "Flowering",
    "Fruiting",
    "Dormant",
    "Other",
)


@dataclass(frozen=True)
class FieldSpec:
    """One prompted field. ``suggestion`` is shown when no value is stored."""

    key: str
    label: str
    suggestion: str | None = None
    dated: bool = False

    def default(self, date_format: str, today: date | None = None) -> str:
        if self.suggestion == TODAY:
            return (today or date.today()).strftime(date_format)
        return self.suggestion or ""


@dataclass(frozen=True)
class Section:
    title: str
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)
    note: str = ""
    with_stage: bool = False


SECTIONS = (
    Section(
        "Basic Information",
        (
            FieldSpec("PLANT_SPECIES", "Plant Species"),
            FieldSpec("DATE_PLANTED", "Date Planted", TODAY, dated=True),
        ),
        with_stage=True,
    ),
    Section(
        "Watering Information",
        (
            FieldSpec("LAST_WATERED_DATE", "Last Watered Date", TODAY, dated=True),
            FieldSpec(
                "WATER_LEVEL_NOTES",
                "Water Level/Moisture Notes (e.g., 'topped up', 'soil dry 1 inch')",
            ),
        ),
    ),
    Section(
        "Nutrient Information",
        (
            FieldSpec(
                "LAST_NUTRIENT_APPLICATION_DATE",
                "Last Nutrient Application Date",
                TODAY,
                dated=True,
            ),
            FieldSpec(
                "NUTRIENT_BRAND_NAME",
                "Nutrient Brand/Product Name (e.g., 'General Hydroponics Flora Series')",
            ),
            FieldSpec(
                "NUTRIENT_DOSE_GENERAL",
                "General Dosage Used (e.g., '1 tsp/gallon', '0.5ml/L of each part')",
            ),
            FieldSpec(
                "NUTRIENT_NITROGEN_N_NOTES",
                "Nitrogen (N) details (e.g., 'Part A - 1ml', 'High N ratio')",
            ),
            FieldSpec(
                "NUTRIENT_PHOSPHORUS_P_NOTES",
                "Phosphorus (P) details (e.g., 'Part B - 0.5ml', 'Bloom booster')",
            ),
            FieldSpec(
                "NUTRIENT_POTASSIUM_K_NOTES",
                "Potassium (K) details (e.g., 'Part C - 0.5ml')",
            ),
            FieldSpec(
                "NUTRIENT_MICROS_OTHER_NOTES",
                "Other Micronutrients/Additives (e.g., 'CalMag 0.25ml/L')",
            ),
        ),
        note="Macronutrient details are optional; enter amounts or concentrations if known.",
    ),
    Section(
        "Environment & Notes",
        (
            FieldSpec("LIGHT_EXPOSURE", "Light Exposure (e.g., 'South window, direct')"),
            FieldSpec("SUBSTRATE", "Substrate (e.g., 'Water', 'LECA', 'Potting Mix')", "Water"),
            FieldSpec("GENERAL_NOTES", "General Notes"),
        ),
    ),
)
