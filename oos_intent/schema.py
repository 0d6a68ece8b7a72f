"""
Pydantic models describing the persisted form of trained classifiers and the
entity definitions they carry.

Every persisted record is versioned: loading data written with another
``schema_version`` fails validation and surfaces as a
:class:`~oos_intent.errors.ModelLoadingError`.
"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListEntity(BaseModel):
    """An entity defined by an explicit list of values and their synonyms."""
    model_config = ConfigDict(extra="forbid")

    name: str
    synonyms: Dict[str, List[str]] = Field(default_factory=dict)

    def all_values(self) -> List[str]:
        values = []
        for canonical, synonyms in self.synonyms.items():
            values.append(canonical)
            values.extend(synonyms)
        return values


class PatternEntity(BaseModel):
    """An entity defined by a regular expression."""
    model_config = ConfigDict(extra="forbid")

    name: str
    pattern: str
    examples: List[str] = Field(default_factory=list)
    case_sensitive: bool = False


class PointCloudModel(BaseModel):
    """Persisted form of :class:`~oos_intent.point_cloud.PointCloudClassifier`."""
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1
    svm_model: Optional[str] = None
    """Opaque optimizer blob. Absent when fewer than two classes were available."""
    labels: List[str]
    """Labels remembered for the degenerate single-label and no-label modes."""


class SvmIntentModel(BaseModel):
    """Persisted form of :class:`~oos_intent.svm_classifier.SvmIntentClassifier`."""
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1
    classifier: PointCloudModel
    list_entities: List[ListEntity]
    pattern_entities: List[PatternEntity]

    @property
    def entity_names(self) -> List[str]:
        """Names of the list entities, then of the pattern entities, in featurizer order."""
        return [e.name for e in self.list_entities] + [e.name for e in self.pattern_entities]


class ExactMatchModel(BaseModel):
    """Persisted form of :class:`~oos_intent.exact_matcher.ExactIntentClassifier`."""
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1
    intent_names: List[str]
    exact_match_index: Dict[str, str]


class OOSIntentModel(BaseModel):
    """Persisted form of :class:`~oos_intent.oos_classifier.OOSIntentClassifier`."""
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1
    training_vocab: List[str]
    """Lowercase tokens of every training utterance, in first-seen order, duplicates kept."""
    base_intent_clf_model: str
    oos_svm_model: Optional[str] = None
    """Absent when out-of-scope training was skipped."""
    exact_match_index: Dict[str, str]
