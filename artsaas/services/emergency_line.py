"""
Crisis resources shown alongside high-risk assessment results.
Kept separate so other regions can be added.
"""
from pydantic import BaseModel

class CrisisResource(BaseModel):
    name: str
    contact: str

class CrisisResources(BaseModel):
    resources: list[CrisisResource]
    next_steps: list[str]

def get_us_crisis_resources() -> CrisisResources:
    return CrisisResources(
        resources=[
            CrisisResource(name="National Suicide Prevention Lifeline", contact="988"),
            CrisisResource(name="Crisis Text Line", contact="Text HOME to 741741"),
        ],
        next_steps=["Connect with a mental health professional"],
    )
