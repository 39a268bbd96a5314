"""Adapters: concrete implementations behind the domain core.

The mixture CDF and the xenocryst filter evaluate scipy's normal CDF; the
exact Smirnov distribution is an in-package lattice-path recursion, since
scipy exposes no public two-sample CDF that takes a statistic. The
visualizer produces plot-ready data series for external renderers.
"""
