"""
Static credibility directory for known news domains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class DirectoryEntry:
    score: int
    bias: str
    reliability: str


KNOWN_SOURCES: Mapping[str, DirectoryEntry] = {
    # Highly credible (90-100)
    "apnews.com": DirectoryEntry(98, "center", "very-high"),
    "reuters.com": DirectoryEntry(97, "center", "very-high"),
    "bbc.com": DirectoryEntry(95, "center-left", "very-high"),
    "npr.org": DirectoryEntry(94, "center-left", "very-high"),
    "wsj.com": DirectoryEntry(93, "center-right", "very-high"),
    "economist.com": DirectoryEntry(94, "center", "very-high"),
    "nytimes.com": DirectoryEntry(91, "center-left", "high"),
    "washingtonpost.com": DirectoryEntry(90, "center-left", "high"),
    "theguardian.com": DirectoryEntry(89, "left", "high"),
    "usatoday.com": DirectoryEntry(88, "center", "high"),
    # Moderately credible (70-89)
    "cnn.com": DirectoryEntry(75, "left", "medium"),
    "foxnews.com": DirectoryEntry(74, "right", "medium"),
    "msnbc.com": DirectoryEntry(72, "left", "medium"),
    "cbsnews.com": DirectoryEntry(82, "center-left", "high"),
    "abcnews.go.com": DirectoryEntry(83, "center-left", "high"),
    "nbcnews.com": DirectoryEntry(81, "center-left", "high"),
    "time.com": DirectoryEntry(80, "center-left", "medium-high"),
    "newsweek.com": DirectoryEntry(75, "center", "medium"),
    "forbes.com": DirectoryEntry(78, "center-right", "medium-high"),
    "bloomberg.com": DirectoryEntry(88, "center", "high"),
    # Lower credibility (below 70)
    "dailymail.co.uk": DirectoryEntry(55, "right", "low"),
    "buzzfeed.com": DirectoryEntry(60, "left", "low-medium"),
    "huffpost.com": DirectoryEntry(65, "left", "medium"),
    "breitbart.com": DirectoryEntry(45, "extreme-right", "very-low"),
    "infowars.com": DirectoryEntry(20, "extreme-right", "very-low"),
    "naturalnews.com": DirectoryEntry(25, "extreme-right", "very-low"),
    "occupydemocrats.com": DirectoryEntry(40, "extreme-left", "very-low"),
    "palmerreport.com": DirectoryEntry(35, "extreme-left", "very-low"),
    # Satire
    "theonion.com": DirectoryEntry(100, "satire", "satire"),
    "babylonbee.com": DirectoryEntry(100, "satire", "satire"),
    "clickhole.com": DirectoryEntry(100, "satire", "satire"),
}

DESCRIPTIONS: Mapping[str, str] = {
    "apnews.com": "Associated Press - Gold standard in objective reporting",
    "reuters.com": "Reuters - International news agency known for factual reporting",
    "bbc.com": "BBC - British public broadcaster with high journalistic standards",
    "cnn.com": "CNN - Major news network with left-leaning perspective",
    "foxnews.com": "Fox News - Major news network with right-leaning perspective",
    "nytimes.com": "New York Times - Prestigious newspaper, slight left-center bias",
    "wsj.com": "Wall Street Journal - Highly respected business journalism, slight right-center bias",
}


class CredibilityDirectory:
    """Domain lookup over a mapping of known sources."""

    def __init__(self, entries: Mapping[str, DirectoryEntry] | None = None) -> None:
        self._entries = dict(KNOWN_SOURCES if entries is None else entries)

    def __contains__(self, domain: str) -> bool:
        return domain in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, domain: str) -> DirectoryEntry | None:
        return self._entries.get(domain)

    @staticmethod
    def describe(domain: str, entry: DirectoryEntry) -> str:
        return DESCRIPTIONS.get(domain) or f"{entry.reliability} reliability, {entry.bias} bias"
