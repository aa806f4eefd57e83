from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


class CweEntry(BaseModel):
    """One record of the CWE reference list, keyed by its short name."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cwe_name: str
    desc: Optional[str] = None
    likelihood_of_exploit: Optional[str] = Field(None, alias="Likelihood_Of_Exploit")
    observed_examples: Optional[Any] = None
    consequences: Optional[Any] = None


class CweListFile(RootModel[List[CweEntry]]):
    pass
