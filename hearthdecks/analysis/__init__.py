from hearthdecks.analysis.statistics import calculate_deck_statistics

__all__ = ["calculate_deck_statistics"]
