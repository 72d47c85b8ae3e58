"""BCash backend - pipeline-driven cash flow forecasting."""
