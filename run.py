"""Entry point for the trace-driven cache simulator.

Usage:
    python run.py -s 4 -E 1 -b 4 -t traces/yi.trace      # summary only
    python run.py -s 4 -E 1 -b 4 -t traces/yi.trace -v   # per-record trace
"""
from tracesim.cli import main


if __name__ == '__main__':
    main()
