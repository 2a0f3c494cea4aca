"""
Heuristic Rule Table
Static, ordered set of weighted pattern rules and the category correlation bonuses

The lexical data that tends to change (URL shorteners, TLD blocklist, shouting
run length, weights) lives in RuleTableConfig and can be overridden from JSON.
"""

import json
import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from phishguard.core.matchers import KeywordSet, Matcher, PhraseContains, RegexLike

logger = logging.getLogger(__name__)


class Category(Enum):
    """Closed set of rule categories"""
    URGENCY = "Urgency"
    FINANCIAL = "Financial"
    AUTHORITY = "Authority"
    SUSPICIOUS_LINKS = "Suspicious Links"
    GENERIC_GREETING = "Generic Greeting"
    BAD_GRAMMAR = "Bad Grammar"
    UNEXPECTED_REWARD = "Unexpected Reward"
    THREAT = "Threat"
    UNEXPECTED_ATTACHMENT = "Unexpected Attachment"
    PSYCHOLOGICAL_TRICKS = "Psychological Tricks"


@dataclass(frozen=True)
class Rule:
    """A single weighted heuristic rule"""
    id: str
    category: Category
    weight: int
    matcher: Matcher
    reason: str
    case_sensitive: bool = False  # evaluated against the original, non-lowercased text


@dataclass(frozen=True)
class CategoryBonus:
    """Additive bonus awarded when both categories match"""
    first: Category
    second: Category
    bonus: int


CATEGORY_BONUSES: Tuple[CategoryBonus, ...] = (
    CategoryBonus(Category.URGENCY, Category.FINANCIAL, 20),
    CategoryBonus(Category.THREAT, Category.SUSPICIOUS_LINKS, 25),
    CategoryBonus(Category.AUTHORITY, Category.FINANCIAL, 25),
    CategoryBonus(Category.AUTHORITY, Category.URGENCY, 20),
    CategoryBonus(Category.UNEXPECTED_ATTACHMENT, Category.URGENCY, 15),
    CategoryBonus(Category.THREAT, Category.AUTHORITY, 20),
)

DEFAULT_URL_SHORTENERS: Tuple[str, ...] = (
    "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly", "is.gd",
    "buff.ly", "cutt.ly", "rebrand.ly", "shorturl.at",
)

# Generic TLDs frequently abused for throwaway phishing domains
DEFAULT_SUSPICIOUS_TLDS: Tuple[str, ...] = (
    "xyz", "top", "click", "loan", "work", "gq", "cf", "ga", "ml", "tk",
    "icu", "buzz", "monster", "rest", "cam",
)

DEFAULT_UPPERCASE_RUN_LENGTH = 5


@dataclass(frozen=True)
class RuleTableConfig:
    """Tunable lexical data behind the default rule table"""
    url_shorteners: Tuple[str, ...] = DEFAULT_URL_SHORTENERS
    suspicious_tlds: Tuple[str, ...] = DEFAULT_SUSPICIOUS_TLDS
    uppercase_run_length: int = DEFAULT_UPPERCASE_RUN_LENGTH
    rule_weights: Dict[str, int] = field(default_factory=dict)


def _alternation(items: Tuple[str, ...]) -> str:
    return "|".join(re.escape(item.lower()) for item in items)


def _suspicious_host_pattern(tlds: Tuple[str, ...]) -> str:
    """
    Host under a listed TLD, either inside a URL or as a bare host.

    A bare host must be followed by a path, port, whitespace or end of text and
    its TLD must be lower case, so "attached.Click here" (a missing space after
    a sentence) is not read as a domain.
    """
    alternation = _alternation(tlds)
    in_url = r"(?i:https?://|www\.)[\w.-]*\.(?i:%s)\b" % alternation
    bare_host = r"(?<![\w./@-])(?i:[a-z0-9-]+(?:\.[a-z0-9-]+)*)\.(?:%s)(?=[/:?#]|[.,;!?)]*(?:\s|$))" % alternation
    return f"{in_url}|{bare_host}"


def build_rules(config: Optional[RuleTableConfig] = None) -> Tuple[Rule, ...]:
    """
    Build the default rule table.

    Order is fixed and only affects the order of evidence in reports;
    weights are summed so it never changes a score.
    """
    config = config or RuleTableConfig()

    rules = (
        Rule(
            "urgency_language", Category.URGENCY, 25,
            RegexLike(r"\b(?:urgent(?:ly)?|immediate action required|immediately|act now|final warning|right away|asap)\b"),
            "Creates a sense of urgency to rush your decision.",
        ),
        Rule(
            "limited_time_pressure", Category.URGENCY, 10,
            PhraseContains(["limited time", "offer expires", "expires today", "within 24 hours", "last chance"]),
            "Pressures you with a limited-time deadline.",
        ),
        Rule(
            "sensitive_information", Category.FINANCIAL, 20,
            RegexLike(r"\b(?:password|passcode|ssn|social security|credit card|card number|pin|cvv)\b"),
            "Requests sensitive information (password, SSN, credit card).",
        ),
        Rule(
            "financial_language", Category.FINANCIAL, 15,
            KeywordSet(["bank", "payment", "invoice", "billing", "refund", "transaction", "bitcoin"]),
            "Uses financial or payment-related language.",
        ),
        Rule(
            "account_verification", Category.AUTHORITY, 20,
            PhraseContains([
                "verify your account", "verify your identity", "confirm your identity",
                "confirm your account", "validate your account", "update your account",
            ]),
            "Asks you to verify or confirm your account as if from an official source.",
        ),
        Rule(
            "authority_impersonation", Category.AUTHORITY, 15,
            RegexLike(r"\b(?:it department|security team|help ?desk|system administrator|account administrator|irs|tax office|fraud department)\b"),
            "Claims to come from an authority such as IT, security staff or a tax office.",
        ),
        Rule(
            "url_shortener", Category.SUSPICIOUS_LINKS, 30,
            RegexLike(r"(?<![\w.-])(?:%s)(?![\w-])" % _alternation(config.url_shorteners)),
            "Uses a URL shortener which can hide the true destination.",
        ),
        Rule(
            "ip_address_link", Category.SUSPICIOUS_LINKS, 20,
            RegexLike(r"https?://\d{1,3}(?:\.\d{1,3}){3}"),
            "Contains a direct IP address link instead of a domain name.",
        ),
        Rule(
            "obfuscated_link", Category.SUSPICIOUS_LINKS, 25,
            RegexLike(r"https?://[^\s/@]+@|@\w+\.\w+/"),
            "Contains an unusual link format that disguises the real host.",
        ),
        Rule(
            "suspicious_tld", Category.SUSPICIOUS_LINKS, 15,
            RegexLike(_suspicious_host_pattern(config.suspicious_tlds), case_sensitive=True),
            "Links to a domain under a top-level domain commonly used for phishing.",
            case_sensitive=True,
        ),
        Rule(
            "link_lure", Category.SUSPICIOUS_LINKS, 10,
            PhraseContains(["click here", "click the link", "click below", "follow the link", "login here", "log in here"]),
            "Pushes you to click a link.",
        ),
        Rule(
            "generic_greeting", Category.GENERIC_GREETING, 10,
            RegexLike(r"\bdear (?:customer|user|valued (?:member|customer)|client|account holder|sir(?:/| or )madam)\b"),
            "Uses a generic greeting instead of your name.",
        ),
        Rule(
            "common_misspellings", Category.BAD_GRAMMAR, 5,
            KeywordSet(["kindly", "plese", "verry", "congratulation", "recieve", "acount", "informations", "untill"]),
            "Contains common spelling or grammatical errors.",
        ),
        Rule(
            "shouting", Category.BAD_GRAMMAR, 5,
            RegexLike(r"[A-Z]{%d,}" % config.uppercase_run_length, case_sensitive=True),
            "Uses long runs of capital letters.",
            case_sensitive=True,
        ),
        Rule(
            "prize_claim", Category.UNEXPECTED_REWARD, 20,
            RegexLike(r"\b(?:you have won|you've won|prize|lottery|free gift|claim your (?:reward|prize)|jackpot|winner)\b"),
            "Promises an unexpected prize or reward.",
        ),
        Rule(
            "account_threat", Category.THREAT, 25,
            RegexLike(
                r"\b(?:account will be (?:suspended|closed|terminated)|account (?:has been )?(?:locked|suspended)"
                r"|suspicious activity|unauthorized (?:access|login)|legal action|will be terminated)\b"
            ),
            "Threatens account suspension or other consequences.",
        ),
        Rule(
            "attachment_reference", Category.UNEXPECTED_ATTACHMENT, 15,
            KeywordSet(["attachment", "attachments", "download", "document"]),
            "References an unsolicited attachment or download.",
        ),
        Rule(
            "secrecy_pressure", Category.PSYCHOLOGICAL_TRICKS, 15,
            PhraseContains([
                "keep this confidential", "don't tell anyone", "do not tell anyone",
                "do not share this", "you have been selected", "exclusive offer", "only you can",
            ]),
            "Uses psychological pressure such as secrecy or exclusivity.",
        ),
    )

    # An empty list would compile to a pattern that matches everywhere
    empty_lists = set()
    if not config.url_shorteners:
        empty_lists.add("url_shortener")
    if not config.suspicious_tlds:
        empty_lists.add("suspicious_tld")
    if empty_lists:
        rules = tuple(rule for rule in rules if rule.id not in empty_lists)

    if not config.rule_weights:
        return rules
    return tuple(
        replace(rule, weight=config.rule_weights[rule.id]) if rule.id in config.rule_weights else rule
        for rule in rules
    )


def _string_list(raw: dict, key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Read a list of strings from the config, falling back to the default on any other shape"""
    value = raw.get(key, default)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        # A blank entry would compile to an alternation that matches everywhere
        return tuple(item.strip() for item in value if item.strip())
    logger.warning(f"Ignoring {key}: expected a list of strings, got {value!r}")
    return default


def load_rule_config(path: Union[str, Path]) -> RuleTableConfig:
    """
    Load rule table overrides from a JSON file.
    Returns the defaults if the file doesn't exist or is invalid.
    """
    path = Path(path)
    if not path.exists():
        return RuleTableConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load rule config from {path}: {e}")
        return RuleTableConfig()

    if not isinstance(raw, dict):
        logger.warning(f"Ignoring rule config {path}: expected a JSON object")
        return RuleTableConfig()

    known_ids = {rule.id for rule in build_rules()}
    weights: Dict[str, int] = {}
    raw_weights = raw.get("rule_weights", {})
    if not isinstance(raw_weights, dict):
        logger.warning(f"Ignoring rule_weights in {path}: expected a JSON object")
        raw_weights = {}
    for rule_id, weight in raw_weights.items():
        if rule_id not in known_ids:
            logger.warning(f"Ignoring weight for unknown rule '{rule_id}'")
        elif not isinstance(weight, int) or isinstance(weight, bool) or weight <= 0:
            logger.warning(f"Ignoring non-positive weight for rule '{rule_id}': {weight!r}")
        else:
            weights[rule_id] = weight

    run_length = raw.get("uppercase_run_length", DEFAULT_UPPERCASE_RUN_LENGTH)
    if not isinstance(run_length, int) or isinstance(run_length, bool) or run_length < 2:
        logger.warning(f"Ignoring invalid uppercase_run_length: {run_length!r}")
        run_length = DEFAULT_UPPERCASE_RUN_LENGTH

    config = RuleTableConfig(
        url_shorteners=_string_list(raw, "url_shorteners", DEFAULT_URL_SHORTENERS),
        suspicious_tlds=tuple(
            t.lstrip(".") for t in _string_list(raw, "suspicious_tlds", DEFAULT_SUSPICIOUS_TLDS) if t.lstrip(".")
        ),
        uppercase_run_length=run_length,
        rule_weights=weights,
    )
    logger.info(f"Loaded rule config from {path}")
    return config
