"""
AquaFuzzy command-line driver.

Usage:
    python run_pipeline.py water --turbidity 120 --ph 7.2 --temperature 18
    python run_pipeline.py water --turbidity 800 --ph 5.2 --temperature 9 --policy data/control/policy.json
    python run_pipeline.py diagnostics --clusters 3 --seed 7
    python run_pipeline.py diagnostics --config data/diagnostics/fcm.json --verbose

Pipelines:
    water        Fuzzy controller: raw water readings → dose, flocculation time, pH correction, scores
    diagnostics  Synthetic fleet data → Fuzzy C-Means → convergence trajectory and risk summary
"""

import sys
import logging
import argparse
from dataclasses import replace

# Fix Windows encoding issues (force UTF-8)
if sys.platform == 'win32':
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')

from aquafuzzy.control import load_policy, run_fuzzy_inference, get_membership_degrees
from aquafuzzy.diagnostics import (
    CLUSTER_NAMES, InvalidInputError, analyze_risk, annotate_points,
    generate_synthetic_data, load_fcm_config, run_fcm,
)
from aquafuzzy.diagnostics.frames import history_frame


def run_water(args):
    policy = load_policy(args.policy)
    inputs = {"turbidity": args.turbidity, "ph": args.ph, "temperature": args.temperature}

    print(f"\nWATER TREATMENT CONTROLLER")
    print("=" * 70)
    print(f"\n1. INPUTS:")
    print(f"   - Turbidity:   {args.turbidity:>7.1f} NTU")
    print(f"   - pH:          {args.ph:>7.2f}")
    print(f"   - Temperature: {args.temperature:>7.1f} °C")

    print(f"\n2. MEMBERSHIP DEGREES:")
    for variable, degrees in get_membership_degrees(inputs).items():
        active = ", ".join(f"{name}={deg:.2f}" for name, deg in degrees.items() if deg > 0) or "(none)"
        print(f"   - {variable:12s}: {active}")

    out = run_fuzzy_inference(inputs, policy=policy)

    print(f"\n3. ACTIVATED RULES:")
    if out.rule_activations:
        for a in out.rule_activations:
            bar = "#" * int(a.firing_strength * 20)
            print(f"   - R{a.id:<3d} {a.firing_strength:>5.1%} [{bar:<20s}] {a.name}")
    else:
        print("   - (no rule fired)")

    print(f"\n4. OUTPUTS:")
    print(f"   - Coagulant dose:     {out.coagulant_dose:.1f} mg/L")
    print(f"   - Flocculation time:  {out.flocculation_time} min")
    print(f"   - pH correction:      {out.ph_correction.value} ({out.ph_correction_amount:.1f} mg/L)")
    print(f"   - Operational cost:   {out.operational_cost:.3f} $/m³")
    print(f"   - Quality score:      {out.quality_score}/100")
    print(f"   - Efficiency:         {out.efficiency}%")
    print(f"   - Risk level:         {out.risk_level.value.upper()}")
    print(f"\n{out.explanation}")
    print("=" * 70 + "\n")
    return 0


def run_diagnostics(args):
    config = load_fcm_config(args.config)
    overrides = {}
    if args.clusters is not None:
        overrides["cluster_count"] = args.clusters
    if args.fuzziness is not None:
        overrides["fuzziness"] = args.fuzziness
    config = replace(config, **overrides)

    points = generate_synthetic_data(rng=args.seed)
    logging.info(f"Generated {len(points)} synthetic points")

    try:
        result = run_fcm(points, config, rng=args.seed)
    except InvalidInputError as e:
        print(f"[ERROR] {e}")
        logging.error(f"FCM rejected input: {e}")
        return 1

    annotate_points(points, result)

    print(f"\nFCM DIAGNOSTICS - {len(points)} machines, k={config.cluster_count}, m={config.fuzziness}")
    print("=" * 70)
    status = "converged" if result.converged else "stopped at max_iterations"
    print(f"\n[1/3] {status} after {result.iteration_count} iterations (error={result.convergence_error:.2e})")

    history = history_frame(result)
    if not history.empty:
        print(f"\n[2/3] Convergence trajectory:")
        print(history.to_string(index=False, float_format=lambda v: f"{v:.6g}"))

    print(f"\n[3/3] Risk summary:")
    counts = {}
    for p in points:
        risk = analyze_risk(p.memberships, CLUSTER_NAMES)
        counts[risk.risk_category] = counts.get(risk.risk_category, 0) + 1
    for category in ("low", "medium", "high", "critical"):
        print(f"   - {category:9s}: {counts.get(category, 0)}")
    print("=" * 70 + "\n")
    return 0


# --- MAIN ---
def main():
    parser = argparse.ArgumentParser(description="AquaFuzzy - fuzzy water treatment control and FCM diagnostics")
    parser.add_argument('--verbose', action='store_true',
                        help='Show DEBUG logs (default: INFO)')
    sub = parser.add_subparsers(dest="command", required=True)

    water = sub.add_parser("water", help="Run the coagulation/flocculation fuzzy controller")
    water.add_argument('--turbidity', type=float, required=True, help='Turbidity (NTU)')
    water.add_argument('--ph', type=float, required=True, help='pH (0-14)')
    water.add_argument('--temperature', type=float, required=True, help='Temperature (°C)')
    water.add_argument('--policy', type=str, default=None, help='Path to policy JSON file (optional)')

    diag = sub.add_parser("diagnostics", help="Cluster synthetic machine data with Fuzzy C-Means")
    diag.add_argument('--clusters', type=int, default=None, help='Number of clusters (overrides config)')
    diag.add_argument('--fuzziness', type=float, default=None, help='Fuzziness m > 1 (overrides config)')
    diag.add_argument('--seed', type=int, default=None, help='Random seed for data generation and seeding')
    diag.add_argument('--config', type=str, default=None, help='Path to FCM config JSON file (optional)')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(message)s')

    if args.command == "water":
        return run_water(args)
    return run_diagnostics(args)


if __name__ == "__main__":
    sys.exit(main())
