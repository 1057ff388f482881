"""Prompts sent to the generative-text provider."""

from skillpilot.schemas.generation import GenerationRequest

# ============================================================================
# Roadmap
# ============================================================================

ROADMAP_SYSTEM_PROMPT = (
    "You are an expert learning designer who creates personalized, practical learning "
    "roadmaps. Generate detailed, actionable content that helps people learn effectively. "
    "Always answer with a single JSON object and nothing else."
)

MIN_WEEKLY_HOURS = 3
MAX_WEEKLY_HOURS = 12

ROADMAP_OUTPUT_FORMAT = """\
{
  "title": "Learning Path Title",
  "description": "Detailed description of the learning journey and outcomes",
  "milestones": [
    {
      "title": "Week 1: Foundation",
      "description": "Detailed description of what to learn this week",
      "weekNumber": 1,
      "estimatedHours": 8,
      "resources": [
        {
          "type": "video",
          "title": "Exact title of a real video, article, book or course",
          "description": "What this resource covers",
          "url": "https://link-to-the-resource",
          "platform": "YouTube",
          "duration": "45 minutes",
          "difficulty": "beginner"
        }
      ],
      "exercises": [
        {
          "title": "Exercise title",
          "description": "What the learner builds or solves",
          "difficulty": "easy",
          "estimatedTime": "1 hour",
          "type": "coding"
        }
      ]
    }
  ]
}"""


def build_roadmap_prompt(request: GenerationRequest) -> str:
    """Render a generation request into the user prompt for the provider."""
    duration = request.duration_weeks
    difficulty = request.difficulty.value
    context = request.context.strip()

    parts = [
        f"Create a comprehensive {duration}-week learning roadmap for mastering "
        f"{request.skill_name} at {difficulty} level."
    ]
    if context:
        parts.append(f"Additional context: {context}")

    parts.append(
        f"""Please provide:
1. A compelling title for this learning path
2. A detailed description explaining what the learner will achieve
3. Exactly {duration} weekly milestones that progressively build skills, numbered 1 to {duration}

For each milestone, include:
- Clear, actionable title
- Detailed description of what to learn and practice
- Realistic time estimate ({MIN_WEEKLY_HOURS}-{MAX_WEEKLY_HOURS} hours per week)
- Specific learning resources with types (video, article, book, practice, project, \
documentation, course, tutorial)
- At least one practice exercise with difficulty (easy, medium, hard) and type \
(coding, reading, practice, project)

Resources must be concrete: name real platforms, real book and course titles, and real \
documentation pages. Do not use placeholder names such as "Resource Title" or "Some video".

Make the content practical, engaging, and tailored to {difficulty} learners. Include \
hands-on projects and real-world applications.

Format as JSON with this structure:
{ROADMAP_OUTPUT_FORMAT}"""
    )
    return "\n\n".join(parts)


# ============================================================================
# Suggestions
# ============================================================================

SUGGESTIONS_SYSTEM_PROMPT = (
    "Generate 5 brief, compelling reasons why learning this skill is valuable. "
    "Put each reason on its own line."
)

MAX_SUGGESTIONS = 5


def build_suggestions_prompt(skill_name: str) -> str:
    return f"Why should someone learn {skill_name}?"
