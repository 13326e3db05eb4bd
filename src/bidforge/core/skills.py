from __future__ import annotations

import re
from dataclasses import dataclass, field

TECHNICAL_PATTERNS: tuple[str, ...] = (
    r"\bpython\b",
    r"\bjava\b",
    r"javascript",
    r"typescript",
    r"\breact",
    r"\bangular",
    r"\bvue",
    r"\bnode",
    r"\bnext\.?js\b",
    r"\bhtml",
    r"\bcss\b",
    r"\bsass\b",
    r"sql\b",
    r"\bnosql\b",
    r"\bpostgres",
    r"\bmongo",
    r"\bredis\b",
    r"\bdatabase",
    r"\baws\b",
    r"\bazure\b",
    r"\bgcp\b",
    r"\bcloud\b",
    r"\bdocker\b",
    r"\bkubernetes\b",
    r"\bterraform\b",
    r"\bdevops\b",
    r"\bci/cd\b",
    r"\bgit",
    r"\blinux\b",
    r"\bapis?\b",
    r"\brest(ful)?\b",
    r"\bgraphql\b",
    r"\bmicroservices?\b",
    r"(?<![\w+])c\+\+",
    r"(?<!\w)c#",
    r"\.net\b",
    r"\bruby\b",
    r"\brails\b",
    r"\bphp\b",
    r"\bgo(lang)?\b",
    r"\brust\b",
    r"\bswift\b",
    r"\bkotlin\b",
    r"\bscala\b",
    r"\bdjango\b",
    r"\bflask\b",
    r"\bfastapi\b",
    r"\bspring\b",
    r"\bmachine learning\b",
    r"\bdeep learning\b",
    r"\btensorflow\b",
    r"\bpytorch\b",
    r"\bpandas\b",
    r"\bdata (science|analysis|engineering|modeling)\b",
    r"\betl\b",
    r"\btableau\b",
    r"\bpower ?bi\b",
    r"\bexcel\b",
    r"\bagile\b",
    r"\bscrum\b",
    r"\bjira\b",
    r"\btesting\b",
    r"\bsoftware\b",
    r"\bsecurity\b",
    r"\bnetworking\b",
)

SOFT_SKILL_PATTERNS: tuple[str, ...] = (
    r"\bleadership\b",
    r"\bcommunication\b",
    r"\bteam ?work\b",
    r"\bcollaborat",
    r"\bproblem[- ]solving\b",
    r"\bcritical thinking\b",
    r"\btime management\b",
    r"\badaptab",
    r"\bflexib",
    r"\bcreativ",
    r"\bmentor",
    r"\bcoaching\b",
    r"\bnegotiat",
    r"\bpresentation",
    r"\bpublic speaking\b",
    r"\binterpersonal\b",
    r"\borganiz",
    r"\battention to detail\b",
    r"\bcustomer service\b",
    r"\bconflict resolution\b",
    r"\bdecision[- ]making\b",
    r"\bemotional intelligence\b",
    r"\bproject management\b",
    r"\bstakeholder",
    r"\bempathy\b",
    r"\bwork ethic\b",
)

_TECHNICAL = [re.compile(pattern, re.IGNORECASE) for pattern in TECHNICAL_PATTERNS]
_SOFT = [re.compile(pattern, re.IGNORECASE) for pattern in SOFT_SKILL_PATTERNS]


@dataclass(slots=True)
class SkillBuckets:
    technical: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)

    def sections(self) -> list[tuple[str, list[str]]]:
        """Non-empty buckets in render order."""
        ordered = [("Technical", self.technical), ("Soft Skills", self.soft), ("Other", self.other)]
        return [(label, items) for label, items in ordered if items]


def is_technical(skill: str) -> bool:
    return any(pattern.search(skill) for pattern in _TECHNICAL)


def is_soft_skill(skill: str) -> bool:
    return any(pattern.search(skill) for pattern in _SOFT)


def categorize_skills(skills: list[str]) -> SkillBuckets:
    buckets = SkillBuckets()
    for raw in skills:
        skill = raw.strip()
        if not skill:
            continue
        if is_technical(skill):
            buckets.technical.append(skill)
        elif is_soft_skill(skill):
            buckets.soft.append(skill)
        else:
            buckets.other.append(skill)
    return buckets
