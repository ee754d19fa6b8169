"""Coach feed for a resolved child.

The recommendations are fixed content for now; only the child's name
is filled in. Authorization happens before this is called.
"""

from immy.db.models import Child
from immy.schemas.coach import CoachData, CurrentActivity, Milestone, RecommendedActivity


def build_coach_data(child: Child) -> CoachData:
    name = child.name
    solar_system = (
        "Create a model solar system using household items to build on "
        f"{name}'s space interest."
    )
    return CoachData(
        child_id=child.id,
        engagement=87,
        new_skills=5,
        current_activity=CurrentActivity(title="Solar System Craft", description=solar_system),
        milestones=[
            Milestone(
                id=1,
                title="Advanced Number Recognition",
                description="Successfully counted to 20 without help",
                icon="star",
            ),
            Milestone(
                id=2,
                title="Scientific Curiosity",
                description="Growing interest in space and planets",
                icon="science",
            ),
        ],
        recommended_activities=[
            RecommendedActivity(
                id=1, title="Solar System Craft", description=solar_system, icon="rocket"
            ),
            RecommendedActivity(
                id=2,
                title="Number Scavenger Hunt",
                description="Find and count objects around the house to practice numbers up to 20.",
                icon="numbers",
            ),
        ],
    )
