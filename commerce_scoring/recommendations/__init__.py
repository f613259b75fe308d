"""
Recommendation engine: dispatches to one of four named variants, scores the
candidates for relevance through the scoring engine and ranks them.

Modules
-------
variants : VariantProfile (candidate ranges, reason, relevance strategy)
           + build_relevance_registry().
engine   : RecommendationEngine — generate(), similar(), popular(), retrain().
ranker   : rank_products() + top_n_per_category() — pure functions, no I/O.
"""
