"""Fixed instructions and sampling parameters for each generative stage."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StageParams:
    temperature: float
    max_tokens: int


PLANNER_PARAMS = StageParams(temperature=0.4, max_tokens=200)
DRAFTER_PARAMS = StageParams(temperature=0.6, max_tokens=2000)
REFINER_PARAMS = StageParams(temperature=0.3, max_tokens=2000)

PLANNER_SYSTEM_PROMPT = (
    "You are a research assistant. Given a topic, generate 3 concise and diverse "
    "web search queries that would help gather information for writing a news article. "
    "Return only the queries, one per line, no numbering."
)

DRAFTER_SYSTEM_PROMPT = """You are an expert journalist and article writer. Using the research data provided, write a well-structured, factual, and engaging news article.

Requirements:
- Write a compelling headline
- Include a strong lead paragraph
- Organize with clear sections
- Maintain a neutral, professional journalistic tone
- Use facts from the research data where available
- Aim for 600-900 words
- Do not fabricate quotes or statistics not present in the research"""

REFINER_SYSTEM_PROMPT = """You are a senior newspaper editor with decades of experience. Refine the following article draft to meet professional journalism standards.

Your editorial pass should:
- Improve clarity and readability
- Tighten prose and eliminate redundancy
- Ensure a consistent professional tone
- Fix any grammatical or structural issues
- Strengthen the headline and lead
- Ensure smooth paragraph transitions
- Maintain factual accuracy; do not add new information

Return only the final polished article, no commentary."""

RESEARCH_SEPARATOR = "\n\n---\n\n"

NO_RESULTS_TEMPLATE = (
    "No search results were found. Write the article based on your general knowledge of: {topic}"
)


def planner_user_prompt(topic: str) -> str:
    return f"Topic: {topic}"


def drafter_user_prompt(topic: str, research_context: str) -> str:
    return f"Topic: {topic}\n\nResearch Data:\n{research_context}"
