"""
commerce_scoring.endpoints — Transport-agnostic request handlers.

Each endpoint validates request bounds, calls the engines and wraps the
result in an envelope.  ``Endpoint.run()`` never raises: validation errors
become status 400, anything else status 500.

Modules:
  base       — Endpoint ABC, EndpointResponse, request validation helpers.
  recommend  — Personalized, similar-product and anonymous recommendations.
  analysis   — Sentiment, fraud detection and product popularity.
  forecast   — Demand forecast.
  model      — Retrain and health.
"""
