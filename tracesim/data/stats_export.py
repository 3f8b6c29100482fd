"""Statistics, summary formatting and exporters.
"""
import csv
import json
import logging
from typing import List, Dict, Optional, Sequence

logger = logging.getLogger(__name__)


class Statistics:
    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    # only the access engine calls these
    def record_hit(self):
        self.hits += 1

    def record_miss(self):
        self.misses += 1

    def record_eviction(self):
        self.evictions += 1

    @property
    def accesses(self):
        return self.hits + self.misses

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }


def format_summary(stats: Statistics) -> str:
    return f"hits:{stats.hits} misses:{stats.misses} evictions:{stats.evictions}"


def format_verbose(record, outcomes: Sequence) -> str:
    """One trace line plus what happened, e.g. 'M 20,1 miss eviction hit'."""
    words = []
    for o in outcomes:
        if o.hit:
            words.append('hit')
        else:
            words.append('miss')
            if o.eviction:
                words.append('eviction')
    return f"{record.kind} {record.address:x},{record.size} " + ' '.join(words)


def export_chart_json(hit_rate_history: List[float], stats: Statistics, fpath: str) -> Optional[str]:
    """Export hit-rate history and stats to a JSON file. Returns saved path or None.
    """
    try:
        data = {
            'hit_rate_history': list(hit_rate_history),
            'stats': stats.as_dict(),
        }
        with open(fpath, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)
        return fpath
    except OSError:
        logger.exception("could not write JSON export to %s", fpath)
        return None


def export_chart_image(hit_rate_history: List[float], fpath: str) -> Optional[str]:
    """Render the cumulative hit-rate history to a chart with matplotlib.

    The output format follows the file extension (pdf, png, svg...).
    Returns the saved file path or None on failure.
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    try:
        ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
        ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
        ax.set_ylim(0, 1)
        ax.set_xlabel('Sample')
        ax.set_ylabel('Hit rate')
        ax.grid(False)
        fig.tight_layout()
        fig.savefig(fpath, dpi=150)
        return fpath
    except (OSError, ValueError):
        logger.exception("could not render chart to %s", fpath)
        return None
    finally:
        plt.close(fig)


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics) -> Optional[str]:
        """Write the statistics as a one-row CSV. Returns saved path or None."""
        try:
            with open(path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(['accesses', 'hits', 'misses', 'evictions', 'hit_rate', 'miss_rate'])
                writer.writerow([
                    stats.accesses, stats.hits, stats.misses, stats.evictions,
                    stats.hit_rate, stats.miss_rate,
                ])
            return path
        except OSError:
            logger.exception("could not write CSV export to %s", path)
            return None

    @staticmethod
    def export_results_file(path: str, stats: Statistics) -> Optional[str]:
        # "<hits> <misses> <evictions>" on a single line
        try:
            with open(path, 'w') as f:
                f.write(f"{stats.hits} {stats.misses} {stats.evictions}\n")
            return path
        except OSError:
            logger.exception("could not write results file %s", path)
            return None
