"""
Live Supply Chain Simulator
===========================
Console front end for the interactive mode: configure the chain, step it
tick by tick or let it run at a fixed interval (Ctrl+C pauses), export the
history to CSV and browse saved runs.

Usage:
    python live_sim_tool.py
"""

from bullwhip import POLICIES, SCENARIOS, LiveSimulation, RunStore
from bullwhip.config import config, configure_logging
from bullwhip.demand import DEMAND_PATTERNS
from bullwhip.engine import HORIZON_TICKS

TIERS = ("retailer", "wholesaler", "factory")

# ---
# INPUT FUNCTIONS
# ---

def ask_choice(prompt, options, default):
    """Pick one of `options` by number, Enter keeps the default"""
    print(f"\n{prompt}")
    for i, option in enumerate(options, 1):
        marker = " (current)" if option == default else ""
        print(f"  {i}. {option}{marker}")
    while True:
        answer = input("Select: ").strip()
        if not answer:
            return default
        try:
            index = int(answer)
            if 1 <= index <= len(options):
                return options[index - 1]
            print(f"Please enter a value between 1 and {len(options)}")
        except ValueError:
            print("Please enter a valid number")


def ask_number(prompt, default, cast=int, low=None, high=None):
    while True:
        answer = input(f"{prompt} [{default}]: ").strip()
        if not answer:
            return default
        try:
            value = cast(answer)
            if (low is None or value >= low) and (high is None or value <= high):
                return value
            print(f"Please enter a value between {low} and {high}")
        except ValueError:
            print("Please enter a valid number")


def configure(sim):
    """Collect live settings from the user"""
    print("\n" + "="*60)
    print("Chain Configuration")
    print("="*60)

    changes = {}
    policy_ids = list(POLICIES)
    for tier in TIERS:
        changes[f"{tier}_policy"] = ask_choice(f"{tier.title()} policy:", policy_ids,
                                               sim.config[f"{tier}_policy"])

    changes['demand_pattern'] = ask_choice("Demand pattern:", list(DEMAND_PATTERNS),
                                           sim.config['demand_pattern'])
    changes['shock_tick'] = ask_number("Shock tick", sim.config['shock_tick'], int, 1, HORIZON_TICKS)
    changes['shock_magnitude'] = ask_number("Shock magnitude", sim.config['shock_magnitude'], float, 1.1, 4.0)
    for tier in TIERS:
        key = f"{tier}_lead_time"
        changes[key] = ask_number(f"{tier.title()} lead time", sim.config[key], int, 1, 8)
    changes['initial_inventory'] = ask_number("Initial inventory", sim.config['initial_inventory'], int, 0)
    changes['speed'] = ask_number("Tick interval (ms)", sim.config['speed'], int, 50, 800)

    sim.update_config(**changes)

# ---
# OUTPUT FUNCTIONS
# ---

def print_header():
    print(f"\n{'Tick':>4} {'Demand':>6} | {'R inv':>6} {'W inv':>6} {'F inv':>6} | "
          f"{'R ord':>6} {'W ord':>6} {'F ord':>6}")
    print("-" * 66)


def print_record(record):
    r, w, f = record['retailer'], record['wholesaler'], record['factory']
    print(f"{record['tick']:>4} {record['customer_demand']:>6} | {r['inventory']:>6} {w['inventory']:>6} "
          f"{f['inventory']:>6} | {r['last_order_placed']:>6} {w['last_order_placed']:>6} "
          f"{f['last_order_placed']:>6}")


def display_status(sim):
    print("\n" + "="*60)
    print(f"Tick {sim.tick}/{HORIZON_TICKS}  "
          f"{'POST-SHOCK' if sim.shock_active else 'Pre-shock baseline'}")
    print("="*60)
    for agent in sim.agents:
        print(f"  {agent}")
        print(f"    avg inventory {agent.avg_inventory:.1f}, service level {agent.service_level:.1f}%, "
              f"stockouts {agent.total_stockouts}")
    print("\nBullwhip ratios:")
    for tier in TIERS:
        print(f"  {tier.title():<11} {sim.bullwhip[tier]:.2f}×")
    if sim.finished:
        print("\n✓ COMPLETE · SAVED")


def display_saved_runs(store):
    runs = store.list_runs()
    if not runs:
        print("\nNO SAVED RUNS")
        return runs
    print(f"\n{len(runs)} SAVED RUNS")
    print("-" * 60)
    for i, run in enumerate(runs, 1):
        print(f"  {i}. {run['scenario_id']:<12} {'/'.join(run['policies'])}  "
              f"factory {run['factory_bw']:.2f}×  service {run['service_level']}%")
    return runs


def run_live(sim):
    print_header()
    try:
        sim.run(on_tick=print_record)
    except KeyboardInterrupt:
        sim.pause()
        print("\nPaused.")

# ---
# MAIN
# ---

def main():
    """Main entry point"""
    configure_logging()
    store = RunStore(config.runs_dir)
    sim = LiveSimulation(store=store)

    print("\n" + "="*60)
    print("LIVE SUPPLY CHAIN SIMULATOR")
    print("Retailer → Wholesaler → Factory")
    print("="*60)

    while True:
        print("\nOptions:")
        print("1. Configure chain")
        print("2. Load preset scenario")
        print("3. Step one tick")
        print("4. Run / resume")
        print("5. Show status")
        print("6. Export CSV")
        print("7. Reset")
        print("8. Saved runs")
        print("9. Exit")

        choice = input("\nSelect option (1-9): ").strip()

        if choice == "1":
            configure(sim)
        elif choice == "2":
            scenario_id = ask_choice("Preset:", list(SCENARIOS), "COVID_SHOCK")
            sim.update_config(**SCENARIOS[scenario_id].config.to_dict())
            print(f"\n{SCENARIOS[scenario_id].label}: {SCENARIOS[scenario_id].description}")
        elif choice == "3":
            record = sim.step()
            if record is None:
                print("\nHorizon reached, reset to run again.")
            else:
                print_header()
                print_record(record)
        elif choice == "4":
            run_live(sim)
        elif choice == "5":
            display_status(sim)
        elif choice == "6":
            path = sim.export_csv("live-sim.csv")
            print(f"\n✓ History saved to {path}" if path else "\nNothing to export yet.")
        elif choice == "7":
            sim.reset()
        elif choice == "8":
            runs = display_saved_runs(store)
            if runs:
                index = ask_number("Load run # (0 to skip)", 0, int, 0, len(runs))
                if index:
                    sim.load_run(runs[index - 1])
        elif choice == "9":
            print("\nExiting...")
            return
        else:
            print("\nInvalid option.")


if __name__ == "__main__":
    main()
