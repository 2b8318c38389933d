"""Macronutrient allocation.

Splits a daily calorie target into protein, fat and carbohydrate grams.

Protein has a body-weight floor (1.8 g/kg, or 2.0 g/kg when body fat is
known) that always wins over the percentage split. Fat follows the
percentage split. Carbohydrates take whatever calories are left after the
realized protein and fat, floored at zero. When the protein floor plus fat
already exceed the target, carbs are zero and the realized total falls below
the target: lean-mass preservation takes priority over matching calories
exactly, and fat/protein are not scaled down to compensate.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from fitplan.models import DietaryPreference

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_FAT = 9
KCAL_PER_GRAM_CARB = 4

PROTEIN_PER_KG = 1.8
PROTEIN_PER_KG_WITH_BODY_FAT = 2.0

# Refeed days shift fat percentage points into carbohydrates
REFEED_FAT_SHIFT = 15


@dataclass(frozen=True)
class MacroSplit:
    """Percentage seed for a dietary pattern (protein/fat/carb %)."""

    protein_pct: int
    fat_pct: int
    carb_pct: int


DEFAULT_SPLIT = MacroSplit(30, 30, 40)

MACRO_SPLITS = {
    DietaryPreference.STANDARD: DEFAULT_SPLIT,
    DietaryPreference.KETO: MacroSplit(25, 70, 5),
    DietaryPreference.PALEO: MacroSplit(35, 40, 25),
    DietaryPreference.VEGAN: MacroSplit(20, 30, 50),
    DietaryPreference.VEGETARIAN: MacroSplit(20, 30, 50),
    DietaryPreference.MEDITERRANEAN: MacroSplit(25, 35, 40),
}


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets."""

    protein_grams: int
    fat_grams: int
    carb_grams: int
    protein_floor_grams: int
    split: MacroSplit

    @property
    def total_calories(self) -> int:
        """Calories actually delivered by the gram targets."""
        return (
            self.protein_grams * KCAL_PER_GRAM_PROTEIN
            + self.fat_grams * KCAL_PER_GRAM_FAT
            + self.carb_grams * KCAL_PER_GRAM_CARB
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_calories"] = self.total_calories
        return data


def split_for(
    dietary_preference: Optional[DietaryPreference],
    refeed_day: bool = False,
) -> MacroSplit:
    """Percentage seed for a preference, optionally shifted for a refeed day."""
    split = MACRO_SPLITS.get(dietary_preference, DEFAULT_SPLIT)
    if refeed_day:
        shift = min(REFEED_FAT_SHIFT, split.fat_pct)
        split = MacroSplit(split.protein_pct, split.fat_pct - shift, split.carb_pct + shift)
    return split


def protein_floor(current_weight: float, body_fat_percentage: Optional[float]) -> int:
    """Minimum daily protein in grams for lean-mass preservation."""
    if body_fat_percentage is not None:
        multiplier = PROTEIN_PER_KG_WITH_BODY_FAT
    else:
        multiplier = PROTEIN_PER_KG
    return round(multiplier * current_weight)


def allocate_macros(
    current_weight: float,
    daily_calorie_target: int,
    body_fat_percentage: Optional[float] = None,
    dietary_preference: Optional[DietaryPreference] = None,
    refeed_day: bool = False,
) -> MacroTargets:
    """Split a daily calorie target into macro grams.

    Args:
        current_weight: Current weight in kg
        daily_calorie_target: Daily calorie target
        body_fat_percentage: Body fat percentage, if measured
        dietary_preference: Dietary pattern for the percentage seed
        refeed_day: Use the refeed-day split (less fat, more carbs)

    Returns:
        MacroTargets with carb_grams >= 0 and protein at or above the floor
    """
    split = split_for(dietary_preference, refeed_day)
    floor_grams = protein_floor(current_weight, body_fat_percentage)

    protein_calories = daily_calorie_target * split.protein_pct / 100
    fat_calories = daily_calorie_target * split.fat_pct / 100

    protein_grams = max(floor_grams, round(protein_calories / KCAL_PER_GRAM_PROTEIN))
    fat_grams = round(fat_calories / KCAL_PER_GRAM_FAT)

    # Carbs by subtraction, after the floor-adjusted protein
    carb_calories = (
        daily_calorie_target - protein_grams * KCAL_PER_GRAM_PROTEIN - fat_calories
    )
    carb_grams = max(0, round(carb_calories / KCAL_PER_GRAM_CARB))

    return MacroTargets(
        protein_grams=protein_grams,
        fat_grams=fat_grams,
        carb_grams=carb_grams,
        protein_floor_grams=floor_grams,
        split=split,
    )
