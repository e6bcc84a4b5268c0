from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from saathi.models.roadmap import Difficulty, RoadmapRequest, RoadmapResponse
from saathi.services.llm import LLMClient, generate_or_fallback

# étapes du gabarit local, cumulées selon le niveau
_STAGES = {
    Difficulty.basic: [
        ("Foundations", ["Core vocabulary and key concepts", "Essential tools and environment setup", "Beginner-friendly tutorials"]),
        ("First Projects", ["Small guided exercises", "Reading and reproducing simple examples"]),
    ],
    Difficulty.intermediate: [
        ("Core Skills", ["Common patterns and best practices", "Standard libraries and frameworks", "Debugging and problem solving"]),
        ("Applied Projects", ["End-to-end projects of moderate size", "Version control and collaboration"]),
    ],
    Difficulty.advanced: [
        ("Specialization", ["Advanced techniques and internals", "Performance and scalability", "Research papers and current trends"]),
        ("Mastery", ["Open-source contributions", "Mentoring and teaching others", "Capstone project"]),
    ],
}

_ORDER = [Difficulty.basic, Difficulty.intermediate, Difficulty.advanced]


def build_roadmap_prompt(domain: str, difficulty: Difficulty) -> str:
    return (
        f"Generate a {difficulty.value} roadmap for learning {domain}. "
        "Include essential topics, skills, and tools. "
        "Format the response in clear sections with bullet points."
    )


def fallback_roadmap(domain: str, difficulty: Difficulty) -> str:
    levels = _ORDER[: _ORDER.index(difficulty) + 1]
    lines = [f"# {difficulty.value} Roadmap: {domain}", ""]

    step = 1
    for level in levels:
        for title, items in _STAGES[level]:
            lines.append(f"## {step}. {title}")
            lines += [f"- {item} in {domain}" for item in items]
            lines.append("")
            step += 1

    lines += ["## Tools & Resources", "- Official documentation", "- Online courses and communities", "- Practice platforms"]
    return "\n".join(lines)


class RoadmapService:
    def __init__(self, llm: LLMClient, use_fallback: bool = True):
        self.llm = llm
        self.use_fallback = use_fallback

    def generate(self, req: RoadmapRequest) -> RoadmapResponse:
        domain = req.domain.strip()
        if not domain or req.difficulty is None:
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST,
                detail="Domain and difficulty are required",
            )

        roadmap = generate_or_fallback(
            self.llm,
            build_roadmap_prompt(domain, req.difficulty),
            lambda: fallback_roadmap(domain, req.difficulty),
            use_fallback=self.use_fallback,
            error_detail="Failed to generate roadmap",
        )
        return RoadmapResponse(roadmap=roadmap)
