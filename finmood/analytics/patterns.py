from __future__ import annotations

from typing import Dict, Iterable, Sequence

from finmood.analytics.models import CategoryStats, MoodPatterns, MoodRecord, MoodStats, PatternSummary

UNCATEGORIZED = "uncategorized"


class PatternAggregator:
    """Group mood records by mood label and by transaction category."""

    def analyze_mood_patterns(self, moods: Sequence[MoodRecord]) -> MoodPatterns:
        if not moods:
            return MoodPatterns(
                summary=PatternSummary(total_moods=0, average_intensity=0, most_common_mood="none")
            )

        by_mood: Dict[str, MoodStats] = {}
        by_category: Dict[str, CategoryStats] = {}

        for record in moods:
            stats = by_mood.setdefault(record.mood, MoodStats())
            stats.count += 1
            stats.total_intensity += record.intensity

            category = self._category_of(record)
            cat = by_category.setdefault(category, CategoryStats())
            cat.count += 1
            cat.moods[record.mood] = cat.moods.get(record.mood, 0) + 1

        for stats in by_mood.values():
            stats.average_intensity = stats.total_intensity / stats.count

        summary = PatternSummary(
            total_moods=len(moods),
            average_intensity=sum(m.intensity for m in moods) / len(moods),
            most_common_mood=most_common_mood(by_mood.items()),
        )
        return MoodPatterns(summary=summary, by_mood=by_mood, by_category=by_category)

    @staticmethod
    def _category_of(record: MoodRecord) -> str:
        tx = record.transaction
        return (tx.category if tx is not None else None) or UNCATEGORIZED


def most_common_mood(entries: Iterable[tuple[str, MoodStats]]) -> str:
    """Left fold in insertion order; the accumulator survives only on a strictly
    greater count, so a tie goes to the later entry."""
    best_mood, best_count = "", 0
    for mood, stats in entries:
        if not best_count > stats.count:
            best_mood, best_count = mood, stats.count
    return best_mood
