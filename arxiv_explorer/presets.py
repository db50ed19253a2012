"""
Topic presets and the arXiv category catalogue.

A preset bundles everything needed to run a specialised search: the free-text
terms sent to arXiv, the category filter, and the weighted keyword table used
to score what comes back. The registry is passed into the scorer explicitly so
tests (or a deployment via PRESETS_FILE) can supply their own table.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from arxiv_explorer.models import CategoryOption, TopicPreset


class UnknownPresetError(ValueError):
    """Raised when a preset name is not in the registry (a configuration mistake)."""


class PresetConfigError(ValueError):
    """Raised when a preset table cannot be loaded."""


class TopicPresetRegistry:
    def __init__(self, presets: Iterable[TopicPreset]) -> None:
        self._presets: dict[str, TopicPreset] = {}
        for preset in presets:
            if preset.name in self._presets:
                raise PresetConfigError(f"Duplicate preset name: {preset.name!r}")
            self._presets[preset.name] = preset

    def get(self, name: str) -> TopicPreset:
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownPresetError(f"Unknown topic preset: {name!r}") from None

    def names(self) -> list[str]:
        return list(self._presets)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[TopicPreset]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

_RF_EXCLUDED = ("quantum", "cryptography", "web security")

DEFAULT_PRESETS: tuple[TopicPreset, ...] = (
    TopicPreset(
        name="RF Analysis",
        search_terms="radio frequency analysis spectrum",
        keyword_weights={
            "radio": 2,
            "frequency": 2,
            "analysis": 1.5,
            "spectrum": 2,
            "rf": 3,
            "signal": 1,
            "wireless": 1,
            "antenna": 1,
            "electromagnetic": 1.5,
        },
        required_keywords=("radio", "frequency", "rf", "spectrum"),
        excluded_keywords=_RF_EXCLUDED,
        categories=("physics.app-ph", "eess.SP", "cs.IT", "physics.ins-det"),
        description="Radio frequency analysis, spectrum analysis, RF characterization",
    ),
    TopicPreset(
        name="RF Capture",
        search_terms="radio frequency capture signal acquisition",
        keyword_weights={
            "radio": 2,
            "frequency": 2,
            "capture": 2,
            "signal": 2,
            "acquisition": 2,
            "rf": 3,
            "receiver": 1.5,
            "sampler": 1.5,
            "recording": 1.5,
            "measurement": 1,
        },
        required_keywords=("radio", "frequency", "signal", "capture"),
        excluded_keywords=_RF_EXCLUDED,
        categories=("eess.SP", "physics.ins-det", "cs.IT"),
        description="RF signal capture, acquisition, and recording techniques",
    ),
    TopicPreset(
        name="RF Simulation",
        search_terms="radio frequency simulation modeling",
        keyword_weights={
            "radio": 2,
            "frequency": 2,
            "simulation": 3,
            "modeling": 2.5,
            "rf": 3,
            "model": 1.5,
            "electromagnetic": 1.5,
            "propagation": 1.5,
            "circuit": 1,
        },
        required_keywords=("radio", "frequency", "simulation", "model"),
        excluded_keywords=_RF_EXCLUDED,
        categories=("physics.comp-ph", "cs.CE", "eess.SP"),
        description="Simulation and modeling of radio frequency systems",
    ),
    TopicPreset(
        name="Quantum Cryptography",
        search_terms="quantum cryptography encryption",
        keyword_weights={
            "quantum": 3,
            "cryptography": 2.5,
            "encryption": 1.5,
            "key": 1,
            "distribution": 1,
            "qkd": 3,
            "qubit": 2,
            "entanglement": 2,
            "security": 1,
            "protocol": 1,
        },
        required_keywords=("quantum", "cryptography"),
        excluded_keywords=("radio frequency", "rf", "web application"),
        categories=("cs.CR", "quant-ph"),
        description="Quantum cryptography, quantum key distribution, post-quantum crypto",
    ),
    TopicPreset(
        name="Classical Cryptography",
        search_terms="cryptography encryption security",
        keyword_weights={
            "cryptography": 3,
            "encryption": 2.5,
            "security": 1.5,
            "cipher": 2,
            "algorithm": 1,
            "protocol": 1,
            "key": 1,
            "authentication": 1.5,
            "symmetric": 1.5,
            "asymmetric": 1.5,
        },
        required_keywords=("cryptography", "encryption", "security"),
        excluded_keywords=("quantum", "radio frequency", "rf", "web application"),
        categories=("cs.CR", "cs.IT"),
        description="Traditional cryptography, encryption algorithms and protocols",
    ),
    TopicPreset(
        name="Web Security",
        search_terms="web security vulnerability application",
        keyword_weights={
            "web": 3,
            "security": 2.5,
            "vulnerability": 2,
            "application": 1.5,
            "attack": 1.5,
            "exploit": 1.5,
            "injection": 1.5,
            "xss": 2,
            "csrf": 2,
            "authentication": 1,
        },
        required_keywords=("web", "security"),
        excluded_keywords=("quantum", "radio frequency", "rf"),
        categories=("cs.CR", "cs.NI", "cs.SE"),
        description="Web application security, vulnerabilities, and protection",
    ),
    TopicPreset(
        name="Social Engineering & Human Factor",
        search_terms="social engineering cybersecurity",
        keyword_weights={
            "social": 2.5,
            "engineering": 2.5,
            "cybersecurity": 3,
            "phishing": 2,
            "human": 1.5,
            "psychology": 1.5,
            "awareness": 1,
            "behavior": 1,
        },
        required_keywords=("social", "engineering"),
        excluded_keywords=(),
        categories=("cs.CY", "cs.CR", "cs.HC", "cs.SI"),
        description="Social engineering attacks and the human factor in cybersecurity",
    ),
)

DEFAULT_REGISTRY = TopicPresetRegistry(DEFAULT_PRESETS)


def load_registry(path: str | Path) -> TopicPresetRegistry:
    """
    Load presets from a JSON file shaped as {name: {searchTerms, keywordWeights, ...}}.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PresetConfigError(f"Cannot read preset file {str(path)!r}: {exc}") from exc

    if not isinstance(payload, dict) or not payload:
        raise PresetConfigError(f"Preset file {str(path)!r} must be a non-empty JSON object")

    presets = []
    for name, body in payload.items():
        if not isinstance(body, dict):
            raise PresetConfigError(f"Preset {name!r} must be a JSON object")
        try:
            presets.append(TopicPreset.model_validate({**body, "name": name}))
        except ValidationError as exc:
            raise PresetConfigError(f"Invalid preset {name!r}: {exc}") from exc
    return TopicPresetRegistry(presets)


# ---------------------------------------------------------------------------
# arXiv computer-science categories
# ---------------------------------------------------------------------------

CS_CATEGORIES: tuple[CategoryOption, ...] = tuple(
    CategoryOption(id=code, name=name)
    for code, name in (
        ("cs.AI", "Artificial Intelligence"),
        ("cs.AR", "Hardware Architecture"),
        ("cs.CC", "Computational Complexity"),
        ("cs.CE", "Computational Engineering"),
        ("cs.CG", "Computational Geometry"),
        ("cs.CL", "Computation and Language"),
        ("cs.CR", "Cryptography and Security"),
        ("cs.CV", "Computer Vision and Pattern Recognition"),
        ("cs.CY", "Computers and Society"),
        ("cs.DB", "Databases"),
        ("cs.DC", "Distributed Computing"),
        ("cs.DL", "Digital Libraries"),
        ("cs.DM", "Discrete Mathematics"),
        ("cs.DS", "Data Structures and Algorithms"),
        ("cs.ET", "Emerging Technologies"),
        ("cs.FL", "Formal Languages and Automata Theory"),
        ("cs.GL", "General Literature"),
        ("cs.GR", "Graphics"),
        ("cs.GT", "Computer Science and Game Theory"),
        ("cs.HC", "Human-Computer Interaction"),
        ("cs.IR", "Information Retrieval"),
        ("cs.IT", "Information Theory"),
        ("cs.LG", "Machine Learning"),
        ("cs.LO", "Logic in Computer Science"),
        ("cs.MA", "Multiagent Systems"),
        ("cs.MM", "Multimedia"),
        ("cs.MS", "Mathematical Software"),
        ("cs.NA", "Numerical Analysis"),
        ("cs.NE", "Neural and Evolutionary Computing"),
        ("cs.NI", "Networking and Internet Architecture"),
        ("cs.OH", "Other Computer Science"),
        ("cs.OS", "Operating Systems"),
        ("cs.PF", "Performance"),
        ("cs.PL", "Programming Languages"),
        ("cs.RO", "Robotics"),
        ("cs.SC", "Symbolic Computation"),
        ("cs.SD", "Sound"),
        ("cs.SE", "Software Engineering"),
        ("cs.SI", "Social and Information Networks"),
        ("cs.SY", "Systems and Control"),
    )
)

_COMMON_CODES = (
    "cs.CR", "cs.AI", "cs.CL", "cs.CV", "cs.LG", "cs.NE",
    "cs.SI", "cs.SE", "cs.DB", "cs.NI", "cs.PL", "cs.RO",
)
COMMON_CATEGORIES: tuple[CategoryOption, ...] = tuple(
    next(c for c in CS_CATEGORIES if c.id == code) for code in _COMMON_CODES
)

DEFAULT_CATEGORY = "cs.LG"
