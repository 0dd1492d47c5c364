#!/usr/bin/env python3
"""
AWS Cost Sankey
Fetches AWS cost data per account and draws it as a Sankey diagram

USAGE EXAMPLES:
  ./cost_sankey.py                                # Chart from configs/configs.yaml
  ./cost_sankey.py -f text -o costs               # Edge list in costs.txt
  ./cost_sankey.py -i costs.txt -o costs          # Chart from an earlier edge list
  ./cost_sankey.py -f text+ai -d                  # Usage types, with OpenAI analysis
"""

import sys

from aws_cost_sankey.cli import main

if __name__ == "__main__":
    sys.exit(main())
