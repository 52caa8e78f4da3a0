# Typed view of meditation documents read from the vector store
from pydantic import BaseModel, Field
from typing import List, Optional, Set


class MeditationRecord(BaseModel):
    """
    A meditation as stored in the `meditations` collection.
    Owned by the document store; this service only reads matches.
    """
    id: str = ""
    name: str = ""
    type: str = ""
    keywords: Set[str] = Field(default_factory=set)
    embedding: List[float] = Field(default_factory=list)
    score: Optional[float] = None  # similarity reported by the store
