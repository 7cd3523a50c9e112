import os
import sys
from pathlib import Path

# Add project root to path so we can import progress_report
sys.path.append(os.getcwd())

from progress_report.config.settings import settings
from progress_report.curriculum import (
    CurriculumStore,
    format_compact,
    format_for_improvement_suggestions,
    resolve_context,
)


def main():
    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.curriculum.data_dir
    store = CurriculumStore(data_dir, settings.curriculum.level_files)
    store.load()

    print(f"Data directory: {data_dir}")
    print("-" * 50)
    levels = store.loaded_levels()
    print(f"Loaded {len(levels)} levels:")
    for level in levels:
        units = store.units_for_level(level)
        print(f"   {level}: {len(units)} units ({', '.join(str(u) for u in units)})")
    for warning in store.warnings:
        print(f"   warning: {warning}")
    print("")

    if not levels:
        print("No curriculum data found.")
        return

    sample_level = levels[0]
    sample_units = store.units_for_level(sample_level)
    if not sample_units:
        print(f"{sample_level} has no units.")
        return
    sample_unit = sample_units[0]

    print(f"Level alias check ({sample_level}, unit {sample_unit})")
    print("-" * 50)
    suffix = sample_level.split(" ", 1)[-1]
    for alias in (sample_level, f"L{suffix}", f"L {suffix}", sample_level.lower()):
        found = resolve_context(store, alias, sample_unit) is not None
        print(f"   {alias:<10} -> {'ok' if found else 'not found'}")
    print("")

    print("Edge cases")
    print("-" * 50)
    for level, unit in (("Level 99", 1), (sample_level, 999), ("", 1), (sample_level, "abc")):
        result = resolve_context(store, level, unit)
        print(f"   ({level!r}, {unit!r}) -> {'found' if result else 'not found'}")
    print("")

    context = resolve_context(store, sample_level, f"Unit {sample_unit}")
    if context is None:
        return
    print(format_compact(context))
    print("")
    print(format_for_improvement_suggestions(context))


if __name__ == "__main__":
    main()
