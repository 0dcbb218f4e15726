from __future__ import annotations
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from secretgate.core.additions import Addition
from .base import Detector, DetectorKind

logger = logging.getLogger(__name__)

_KEYWORDS = r"(?:password|passphrase|secret|key|pwd|pword|pass)"

# No rule nests unbounded repeats; long single-line files stay cheap.
DEFAULT_PATTERN_RULES = [
    {
        "name": "Password assignment",
        "pattern": r"(?im)^[^\n]*?" + _KEYWORDS + r"[^\n:=>]*[:=>][^,;\n]{8,}",
    },
    {
        "name": "Password keyword value",
        "pattern": r"(?i):" + _KEYWORDS + r"[^\n]*? [^,;\n]{8,}",
    },
    {
        "name": "Short password assignment",
        "pattern": r"(?i)['\"_]?pw['\"]? *[:=][^,;\n]{8,}",
    },
    {
        "name": "Password tag",
        "pattern": r"(?i)<(password|passphrase)\b[^>\n]*>[^\n]*?</(?:password|passphrase)>",
    },
    {
        "name": "Consumer key tag",
        "pattern": r"(?i)<ConsumerKey>\S*</ConsumerKey>",
    },
    {
        "name": "Consumer secret tag",
        "pattern": r"(?i)<ConsumerSecret>\S*</ConsumerSecret>",
    },
    {
        "name": "AWS key prose",
        # lookahead settles the terminator before searching for the keyword
        "pattern": r"(?i)AWS(?=[ \w]+[:=])[ \w]+?key[ \w]+[:=]",
    },
    {
        "name": "AWS secret prose",
        "pattern": r"(?i)AWS(?=[ \w]+[:=])[ \w]+?secret[ \w]+[:=]",
    },
    {
        "name": "AWS Access Key",
        "pattern": r"\bAKIA[0-9A-Z]{16}\b",
    },
    {
        "name": "Private Key block",
        # ``(?s)`` lets the block span lines
        "pattern": r"(?s)BEGIN (?:[A-Z0-9]+ )*PRIVATE KEY.*?END (?:[A-Z0-9]+ )*PRIVATE KEY",
    },
]


class PatternDetector(Detector):
    """Flags secret-shaped content using a catalog of regexes.

    rules: List[dict] with keys:
      - name: str (human label, used in debug logs)
      - pattern: str (compiled)

    The failure message for every match is the matched text itself, so the
    same secret committed twice collapses onto one message key.
    """

    def __init__(self, rules: Optional[List[Dict[str, Any]]] = None) -> None:
        compiled = []
        for r in DEFAULT_PATTERN_RULES if rules is None else rules:
            pat = r.get("pattern")
            if not pat:
                raise ValueError(f"Pattern rule {r.get('name', '<unnamed>')!r} has no pattern")
            compiled.append(
                {
                    "name": r.get("name", pat),
                    "pattern": re.compile(pat),
                }
            )
        self._rules = compiled

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.FILECONTENT

    def check(self, addition: Addition) -> Iterable[str]:
        text = addition.text()
        if not text:
            return []
        messages = []
        for rule in self._rules:
            for m in rule["pattern"].finditer(text):
                logger.debug("%s matched in %s", rule["name"], addition.path)
                messages.append(m.group(0))
        return messages
