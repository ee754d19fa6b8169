"""Schemas for the coach feed."""

from pydantic import BaseModel


class CurrentActivity(BaseModel):
    title: str
    description: str


class Milestone(BaseModel):
    id: int
    title: str
    description: str
    icon: str


class RecommendedActivity(BaseModel):
    id: int
    title: str
    description: str
    icon: str


class CoachData(BaseModel):
    child_id: int
    engagement: int
    new_skills: int
    current_activity: CurrentActivity
    milestones: list[Milestone] = []
    recommended_activities: list[RecommendedActivity] = []
