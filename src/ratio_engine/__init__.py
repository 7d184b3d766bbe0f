"""
Exact rational arithmetic over typed quantities.

Amounts are natural numbers tagged with an opaque brand; ratios of amounts express
prices, fees, exchange rates and thresholds. No floating point is used on any exact
path, so every replica computes bit-identical results.
"""
