"""What would ATLAS do with a rough morning?

Runs the decision core on a hard-coded check-in against a planned
swim, without a database: readiness, decision, the resulting patch and
the adjusted plan, plus the exact-total swim example.

Usage:
    python scripts/simulate_checkin.py
"""

import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.atlas import RigiditySetting, decide, is_locked, score_readiness
from app.atlas.adaptation import patch_for_decision
from app.atlas.exact_total import enforce_exact_total
from app.atlas.plan_format import export_plan_to_text
from app.atlas.prescription import generate_plan_options
from app.schemas.benchmarks import BenchmarkSet
from app.schemas.decision import WorkoutMeta
from app.schemas.signals import CheckInSignals, MuscleSoreness, SignalSnapshot

TODAY = datetime.date(2026, 3, 2)

CHECKIN = CheckInSignals(
    sleep_duration_hrs=5.5,
    sleep_quality=2,
    physical_fatigue=4,
    muscle_soreness=MuscleSoreness.MODERATE,
    mental_readiness=3,
    motivation=3,
    stress_level=4,
)

WORKOUT = WorkoutMeta(id=1, type="swim", title="Swim intervals", duration_min=60, date=TODAY)
BENCHMARKS = BenchmarkSet(swim_css_sec_per_100="1:45", run_10k_time_sec="45:00", ftp=250)

SWIM_TEXT = """## Warm-up
- 400 m — easy
## Main set
- 8×100 m — steady • rest 0:20
- 4×200 m — moderate • rest 0:30
## Cool-down
- 400 m — easy"""


def main() -> None:
    readiness = score_readiness(SignalSnapshot(user_id=1, date=TODAY, checkin=CHECKIN))
    print(f"Readiness: {readiness.score} ({readiness.status.value}), "
          f"confidence {readiness.confidence}% ({readiness.confidence_level})")
    for factor in readiness.top_factors(5):
        print(f"  {factor.impact:+6.1f}  {factor.name:<16} {factor.description}")
    print()

    decision = decide(readiness, WORKOUT)
    print(f"Decision: {decision.action} ({decision.confidence}%)")
    print(f"  {decision.text}")
    print()

    for rigidity in (RigiditySetting.LOCKED_TODAY, RigiditySetting.FLEXIBLE_WEEK):
        verdict = "proposal" if is_locked(WORKOUT.date, TODAY, rigidity) else "applied directly"
        print(f"  {rigidity.value:<14} -> {verdict}")
    print()

    patch = patch_for_decision(decision, WORKOUT, BENCHMARKS)
    if patch is not None:
        print("Patch touches:", ", ".join(patch.touched_fields()))
        print(patch.values()["description_md"])
        print()

    options = generate_plan_options(
        "swim", 60, title="steady swim", benchmarks=BENCHMARKS, target_meters=3000,
    )
    print(f"Planned swim ({options.planned.total_meters} m):")
    print(export_plan_to_text(options.planned))
    print()

    fixed = enforce_exact_total(SWIM_TEXT, 3000)
    print("3200 m text set trimmed to 3000 m:")
    print(fixed)


if __name__ == "__main__":
    main()
