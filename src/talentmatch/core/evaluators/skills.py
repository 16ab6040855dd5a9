"""Required-skill overlap evaluator."""

from __future__ import annotations

from typing import Any

from ..attributes import MatchAttributes, sort_skills


class SkillOverlapEvaluator:
    """Share of the job's required skills the candidate lists, exact token match."""

    method = "skills"

    def evaluate(self, attributes: MatchAttributes) -> dict[str, Any]:
        required = attributes.required_skills
        owned = attributes.candidate_skills

        matching = sort_skills(label for key, label in required.items() if key in owned)
        missing = sort_skills(label for key, label in required.items() if key not in owned)
        fit = len(matching) / max(1, len(required)) if required else 1.0

        return {
            "method": self.method,
            "scores": {"skills": fit},
            "metadata": {
                "matching_skills": matching,
                "missing_skills": missing,
                "required_count": len(required),
                "matched_count": len(matching),
            },
        }
