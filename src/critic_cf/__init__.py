"""Critic-based user-user collaborative filtering."""

from .config import RecommendConfig, load_recommend_config
from .errors import CriticCFError, DegenerateInputError, InvalidArgument
from .matrix import UNRATED, RatingsMatrix
from .recommender import (
    CriticRecommender,
    RecommendedItem,
    SimilarSubject,
    get_recommendation,
    rank_items,
    similar_subjects,
    similarity_vector,
    weighted_scores,
)
from .similarity import (
    METRICS,
    SimilarityMetric,
    cosine_similarity,
    euclidean_score,
    euclidean_similarity,
    get_metric,
    pearson_similarity,
    tanimoto_similarity,
)
