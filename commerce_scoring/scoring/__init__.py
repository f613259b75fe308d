"""
commerce_scoring.scoring — Feature vectors, weighted rules, band tables and
the strategy registry behind every score in the service.

Modules:
  features  — FeatureVector and the tagged values Number / Flag / Category.
  bands     — ScoreBand / BandTable and the domain band tables.
  rules     — WeightedRule, StrategyDefinition and predicate helpers.
  registry  — StrategyRegistry: name -> strategy, default fallback, atomic swap.
  engine    — ScoringEngine.compute(name, features) -> ScoringResult.
  domains   — Fraud, sentiment, rating, popularity and stock strategies.
  analysis  — Request-field façades over the domain strategies.
"""
