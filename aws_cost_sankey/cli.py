"""
Command Line Interface for AWS Cost Sankey
"""

import argparse
import dataclasses
import sys

from .config import Config, default_config_path
from .exceptions import CostSankeyError
from .main import OUTPUT_FORMATS, AWSCostSankey


def build_parser():
    parser = argparse.ArgumentParser(
        description=(
            "AWS Cost Sankey - Break AWS costs down by account, environment "
            "and service"
        )
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=default_config_path(),
        help="Path to the config file (default: %(default)s)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="output",
        help="Name of output file. Suffix is determined by output format",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default="chart",
        help="Output format: text, chart, or text+ai (text with OpenAI analysis)",
    )
    parser.add_argument(
        "-d",
        "--usage-type",
        action="store_true",
        help="Show UsageType instead of Service",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        help=(
            "Text file from which the cost data will be read. "
            "If not provided, data is fetched from AWS Cost Explorer"
        ),
    )
    parser.add_argument("--start-date", type=str, help="Override startDate (YYYY-MM-DD)")
    parser.add_argument("--end-date", type=str, help="Override endDate (YYYY-MM-DD)")
    parser.add_argument(
        "--threshold", type=float, help="Override the chart link threshold"
    )
    return parser


def apply_overrides(config, args):
    """Return config with any command line overrides applied"""
    overrides = {}
    if args.start_date or args.end_date:
        # Re-validate the dates through the same path as the file
        dates = Config.from_dict(
            {
                "startDate": args.start_date or config.start_date,
                "endDate": args.end_date or config.end_date,
            }
        )
        overrides["start_date"] = dates.start_date
        overrides["end_date"] = dates.end_date
    if args.threshold is not None:
        overrides["threshold"] = args.threshold
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    print("🏦 AWS COST SANKEY")
    print("=" * 60)

    try:
        config = apply_overrides(Config.load(args.config), args)
        pipeline = AWSCostSankey(config)
        output_file = pipeline.run(
            output_base=args.output,
            output_format=args.format,
            input_file=args.input,
            usage_type=args.usage_type,
        )
    except CostSankeyError as e:
        print(f"❌ {e}")
        return 1

    print(f"🎉 Output written to {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
