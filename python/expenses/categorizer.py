"""
Expense Categorizer Module

Suggests an expense category from the vendor name using keyword rules first,
then optionally Claude for vendors the rules only guess at.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import anthropic
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_CONFIG = {
    "rules": [
        {"category": "Cloud", "keywords": ["aws", "azure", "gcp"], "confidence": 0.82},
        {"category": "Travel", "keywords": ["uber", "lyft"], "confidence": 0.76},
        {"category": "Office Supplies", "keywords": ["amazon", "staples"], "confidence": 0.71},
    ],
    "large_amount": {"threshold": 500, "category": "Contractors", "confidence": 0.66},
    "fallback": {"category": "General", "confidence": 0.55},
    "categories": [
        "Cloud", "Travel", "Office Supplies", "Contractors", "Software",
        "Meals", "Utilities", "Rent", "Marketing", "General",
    ],
}


@dataclass
class CategorySuggestion:
    """Suggested category for an expense."""

    category: str
    confidence: float
    method: str  # 'rule', 'amount', 'fallback', 'claude'

    @property
    def confidence_percent(self) -> int:
        return round(self.confidence * 100)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "confidence": self.confidence,
            "confidence_percent": self.confidence_percent,
            "method": self.method,
        }


class ExpenseCategorizer:
    """Suggests expense categories."""

    DEFAULT_MODEL = "claude-sonnet-4-5-20250929"

    def __init__(
        self,
        config_dir: Path | str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        use_claude: bool | None = None
    ):
        """Initialize the categorizer.

        Args:
            config_dir: Path to configuration directory
            api_key: Anthropic API key
            model: Claude model to use
            use_claude: Ask Claude when rules only produce a generic guess
                (defaults to whether an API key is available)
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent.parent.parent / "config"
        self.model = model or self.DEFAULT_MODEL

        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.use_claude = bool(api_key) if use_claude is None else use_claude

        if self.use_claude:
            self.client = anthropic.Anthropic(api_key=api_key)
        else:
            self.client = None

        self._load_config()

    def _load_config(self) -> None:
        """Load category rules."""
        config_file = self.config_dir / "expense_categories.yaml"
        if config_file.exists():
            with open(config_file) as f:
                self.config = yaml.safe_load(f) or {}
        else:
            self.config = DEFAULT_CATEGORY_CONFIG

        self.rules = self.config.get("rules", DEFAULT_CATEGORY_CONFIG["rules"])
        self.large_amount = self.config.get("large_amount", DEFAULT_CATEGORY_CONFIG["large_amount"])
        self.fallback = self.config.get("fallback", DEFAULT_CATEGORY_CONFIG["fallback"])
        self.categories = self.config.get("categories", DEFAULT_CATEGORY_CONFIG["categories"])

    def suggest_by_rules(self, vendor: str, amount: Decimal | float) -> CategorySuggestion:
        """Keyword/amount rule suggestion.

        Args:
            vendor: Vendor name
            amount: Expense amount

        Returns:
            CategorySuggestion
        """
        v = (vendor or "").lower()

        for rule in self.rules:
            if any(keyword.lower() in v for keyword in rule.get("keywords", [])):
                return CategorySuggestion(
                    category=rule["category"],
                    confidence=float(rule.get("confidence", 0.7)),
                    method="rule",
                )

        if Decimal(str(amount or 0)) > Decimal(str(self.large_amount["threshold"])):
            return CategorySuggestion(
                category=self.large_amount["category"],
                confidence=float(self.large_amount["confidence"]),
                method="amount",
            )

        return CategorySuggestion(
            category=self.fallback["category"],
            confidence=float(self.fallback["confidence"]),
            method="fallback",
        )

    def suggest(self, vendor: str, amount: Decimal | float) -> CategorySuggestion:
        """Suggest a category, asking Claude when rules find no keyword match.

        Args:
            vendor: Vendor name
            amount: Expense amount

        Returns:
            CategorySuggestion
        """
        suggestion = self.suggest_by_rules(vendor, amount)

        if suggestion.method == "rule" or not (self.use_claude and self.client and vendor):
            return suggestion

        claude_suggestion = self._suggest_with_claude(vendor, amount)
        if claude_suggestion and claude_suggestion.confidence > suggestion.confidence:
            return claude_suggestion

        return suggestion

    def _suggest_with_claude(self, vendor: str, amount: Decimal | float) -> CategorySuggestion | None:
        """Ask Claude for a category.

        Returns:
            CategorySuggestion or None on any failure
        """
        prompt = f"""You categorize small-business expenses.
Allowed categories: {", ".join(self.categories)}

Vendor: {vendor}
Amount: {float(amount or 0):.2f}

Output ONLY a JSON object: {{"category": <one allowed category>, "confidence": <0.0-1.0>}}"""

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=200,
                messages=[{"role": "user", "content": prompt}]
            )

            cleaned = message.content[0].text.strip()
            cleaned = re.sub(r'^```json\s*', '', cleaned)
            cleaned = re.sub(r'^```\s*', '', cleaned)
            cleaned = re.sub(r'\s*```$', '', cleaned)
            data = json.loads(cleaned)

            category = data.get("category")
            if category not in self.categories:
                logger.warning(f"Claude suggested unknown category {category!r} for {vendor!r}")
                return None

            return CategorySuggestion(
                category=category,
                confidence=float(data.get("confidence", 0.5)),
                method="claude",
            )

        except Exception as e:
            logger.error(f"Claude categorization error: {e}")
            return None
