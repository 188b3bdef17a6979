"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Static worked examples used by the template generators and the prompt builder.
"""

import copy
import random
from typing import Dict, List, Optional

from .types import Example

DOMAIN_EXAMPLES: Dict[str, List[Example]] = {
    "general": [
        Example(
            context="Photosynthesis is the process by which plants use sunlight, water, and carbon dioxide to produce glucose and oxygen.",
            question="What is photosynthesis?",
            answer="Photosynthesis is the process where plants convert sunlight, water, and carbon dioxide into glucose (food) and oxygen.",
        ),
        Example(
            context="The water cycle includes evaporation, condensation, precipitation, and collection. Water evaporates from oceans and lakes, forms clouds, falls as rain, and returns to water bodies.",
            question="How does the water cycle work?",
            answer="The water cycle works through four main stages: evaporation (water rises as vapor), condensation (vapor forms clouds), precipitation (rain/snow falls), and collection (water returns to bodies of water).",
        ),
        Example(
            context="Gravity is a fundamental force that attracts objects with mass toward each other. On Earth, gravity pulls objects toward the center of the planet.",
            question="What is gravity?",
            answer="Gravity is a fundamental force that attracts objects with mass toward each other, which is why objects fall toward Earth's center.",
        ),
    ],
    "technical": [
        Example(
            context="Machine learning algorithms learn patterns from data without being explicitly programmed. They improve performance through experience and can make predictions on new data.",
            question="How do machine learning algorithms work?",
            answer="Machine learning algorithms work by learning patterns from training data, then use these patterns to make predictions or decisions on new, unseen data without being explicitly programmed for each specific task.",
        ),
        Example(
            context="APIs (Application Programming Interfaces) allow different software applications to communicate with each other. They define the methods and data formats for requesting and exchanging information.",
            question="What is an API?",
            answer="An API (Application Programming Interface) is a set of protocols and tools that allows different software applications to communicate and share data with each other in a standardized way.",
        ),
    ],
    "academic": [
        Example(
            context="The scientific method involves observation, hypothesis formation, experimentation, data analysis, and conclusion drawing. It's a systematic approach to understanding natural phenomena.",
            question="What are the steps of the scientific method?",
            answer="The scientific method includes: 1) Observation of phenomena, 2) Forming a hypothesis, 3) Designing and conducting experiments, 4) Analyzing data, and 5) Drawing conclusions that support or refute the hypothesis.",
        ),
    ],
}

CHAIN_OF_THOUGHT_EXAMPLES: List[Example] = [
    Example(
        context="A company's revenue increased from $100,000 to $150,000 over one year.",
        question="What was the percentage increase in revenue?",
        answer="Let me solve this step by step:\n1. Find the increase: $150,000 - $100,000 = $50,000\n2. Calculate percentage: ($50,000 ÷ $100,000) × 100 = 50%\n3. Therefore, the revenue increased by 50%.",
    ),
    Example(
        context="A recipe calls for 2 cups of flour to make 12 cookies. You want to make 18 cookies.",
        question="How much flour do you need?",
        answer="Let me work through this:\n1. Find the ratio: 2 cups flour for 12 cookies\n2. Calculate per cookie: 2 ÷ 12 = 0.167 cups per cookie\n3. For 18 cookies: 0.167 × 18 = 3 cups\n4. Therefore, I need 3 cups of flour.",
    ),
]

REASONING_EXAMPLES: Dict[str, List[Example]] = {
    "general": [
        Example(
            context="Solar panels convert sunlight into electricity using photovoltaic cells. They work best in direct sunlight and their efficiency decreases on cloudy days.",
            question="Why might solar panels produce less electricity in winter?",
            reasoning="I need to consider factors that affect solar panel efficiency in winter: shorter daylight hours, lower sun angle, potential cloud cover, and possible snow coverage blocking panels.",
            answer="Solar panels produce less electricity in winter because of shorter daylight hours, lower sun angles that reduce direct sunlight exposure, increased cloud cover, and potential snow coverage that blocks the panels.",
        ),
    ],
}

# Short Q/A snippets keyed by question type, then expertise level
ADAPTIVE_SNIPPETS: Dict[str, Dict[str, List[str]]] = {
    "factual": {
        "beginner": ["Q: What is photosynthesis?\nA: Photosynthesis is how plants make food using sunlight."],
        "intermediate": ["Q: How does machine learning work?\nA: Machine learning uses algorithms to find patterns in data."],
        "expert": ["Q: What are quantum entanglement implications?\nA: Quantum entanglement demonstrates non-local correlations between particles."],
    },
    "analytical": {
        "beginner": ["Q: Why do leaves change color?\nA: Step by step:\n1. Chlorophyll breaks down\n2. Other pigments become visible\n3. Creates fall colors."],
        "intermediate": ["Q: What factors contribute to inflation?\nA: Several factors:\n1. Supply/demand imbalances\n2. Monetary policy\n3. External shocks\n4. Consumer expectations"],
    },
}

DEFAULT_DOMAIN = "general"


class ExampleBank:
    """
    Lookup of worked examples by domain.

    Each bank owns a copy of the static data, so add_example only affects that
    bank. Sampling uses the injected random source.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.examples = copy.deepcopy(DOMAIN_EXAMPLES)
        self.chain_of_thought_examples = list(CHAIN_OF_THOUGHT_EXAMPLES)
        self.reasoning_examples = copy.deepcopy(REASONING_EXAMPLES)
        self.snippets = copy.deepcopy(ADAPTIVE_SNIPPETS)

    def domains(self) -> List[str]:
        return list(self.examples.keys())

    def _domain_examples(self, domain: str) -> List[Example]:
        return self.examples.get(domain) or self.examples[DEFAULT_DOMAIN]

    def get_example(self, domain: str = DEFAULT_DOMAIN) -> Example:
        """One example from the domain; unknown domains fall back to general."""
        return self.rng.choice(self._domain_examples(domain))

    def get_multiple_examples(self, domain: str = DEFAULT_DOMAIN, count: int = 3) -> List[Example]:
        """Shuffled examples from the domain, capped at the number available."""
        shuffled = list(self._domain_examples(domain))
        self.rng.shuffle(shuffled)
        return shuffled[:max(0, min(count, len(shuffled)))]

    def get_chain_of_thought_examples(self) -> List[Example]:
        return list(self.chain_of_thought_examples)

    def get_reasoning_examples(self, domain: str = DEFAULT_DOMAIN) -> List[Example]:
        return list(self.reasoning_examples.get(domain) or self.reasoning_examples[DEFAULT_DOMAIN])

    def select_relevant_examples(self, question_type: str, expertise_level: str, limit: int = 2) -> List[str]:
        """Q/A snippets for a (question type, expertise level) pair, at most limit."""
        return list(self.snippets.get(question_type, {}).get(expertise_level, []))[:limit]

    def add_example(self, domain: str, example: Example) -> None:
        self.examples.setdefault(domain, []).append(example)
