#!/usr/bin/env python3
"""
Classroom Seating - Desk Allocation

Main entry point: loads a roster and configuration, produces a layout
(randomized, or in import order with --sequential), prints a summary and
writes the seating CSV and plot under output/.
"""

import sys
import argparse
import time

from seating.config_loader import (
    ConfigurationError,
    create_session_from_config,
    get_export_config,
    get_visualization_config,
    print_config_summary,
)
from seating.exporter import create_seating_file
from seating.metrics import SeatingMetrics, print_seating_report
from seating.roster import load_roster, strip_directives


def run_seating(roster_path, config_path="config.yaml", sequential=False, show_summary=True,
                output_name=None, save_plots=True):
    """Build a layout for the roster and export it"""
    if show_summary:
        print("=" * 60)
        print("CLASSROOM SEATING")
        print("=" * 60)
        print_config_summary(config_path)

    entries = load_roster(roster_path)
    session = create_session_from_config(config_path)

    print(f"\nSeating {len(entries)} roster entries...")
    start_time = time.time()

    if sequential:
        result = session.import_roster(entries)
    else:
        session.roster = strip_directives(entries, session.disable_token, session.empty_token)
        result = session.shuffle()

    elapsed_time = time.time() - start_time
    print(f"Layout completed in {elapsed_time:.3f} seconds")

    print(f"\nResults Summary:")
    print(f"  Grid: {session.config.rows} rows x {session.config.cols} desks")
    print(f"  Seated: {len(session.roster) - len(result.unseated)}/{len(session.roster)}")
    for note in result.notes:
        print(f"  - {note}")

    if output_name is None:
        output_name = f"seating_{int(time.time())}"

    print(f"\nExporting seating file as '{output_name}.csv'...")
    export_config = get_export_config(config_path)
    try:
        file_path = create_seating_file(session.desks(), output_name, session.exporter,
                                        bom=bool(export_config.get('bom', True)))
        print(f"  ✓ CSV: {file_path}")
    except OSError as e:
        print(f"  ✗ CSV: Failed - {e}")

    if save_plots:
        print(f"\nGenerating seating plot...")
        # Non-interactive backend; plots are only written to disk
        import matplotlib
        matplotlib.use('Agg')
        from seating.visualization import SeatingVisualizer

        vis_config = get_visualization_config(config_path)
        plot_path = f"output/{output_name}_plot.png"
        visualizer = SeatingVisualizer(session.config)
        visualizer.save_layout(session.desks(), plot_path,
                               figsize=tuple(vis_config.get('figure_size', [12, 8])))
        print(f"  ✓ Plot: {plot_path}")

    return session, result


def run_detailed_analysis(roster_path, config_path="config.yaml", sequential=False,
                          output_name=None, save_plots=True):
    """Build a layout and print the full seating report"""
    session, result = run_seating(roster_path, config_path, sequential,
                                  output_name=output_name, save_plots=save_plots)

    metrics = SeatingMetrics(session.config).analyze_seating(session.roster, session.state)
    print("\n" + print_seating_report(metrics))

    return session, result, metrics


def main():
    """Main entry point with command-line argument parsing"""
    parser = argparse.ArgumentParser(
        description="Classroom Seating - Desk Allocation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py roster.txt                        # Random layout (CSV + plot)
  python3 main.py roster.txt --sequential           # Keep roster order, apply directives
  python3 main.py roster.txt --detailed             # With seating report
  python3 main.py roster.txt --output-name room_a   # room_a.csv + room_a_plot.png
  python3 main.py roster.txt --config custom.yaml   # Custom config file
        """
    )

    parser.add_argument('roster', help='Roster file, one "name,gender" entry per line')

    parser.add_argument(
        '--config', '-c',
        default='config.yaml',
        help='Configuration file path (default: config.yaml)'
    )

    parser.add_argument(
        '--sequential', '-s',
        action='store_true',
        help='Place people in roster order instead of shuffling'
    )

    parser.add_argument(
        '--detailed', '-d',
        action='store_true',
        help='Print the seating report'
    )

    parser.add_argument(
        '--output-name', '-n',
        type=str,
        metavar='NAME',
        help='Base name for output files (default: seating_TIMESTAMP)'
    )

    parser.add_argument(
        '--no-plot',
        action='store_true',
        help='Skip the seating plot'
    )

    args = parser.parse_args()

    try:
        if args.detailed:
            run_detailed_analysis(args.roster, args.config, args.sequential,
                                  args.output_name, save_plots=not args.no_plot)
        else:
            run_seating(args.roster, args.config, args.sequential,
                        output_name=args.output_name, save_plots=not args.no_plot)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except (ConfigurationError, OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
