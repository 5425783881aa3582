"""
algorithms — ordering policies, single-container evaluation, selection,
multi-container packing, diagnosis and the sizing preview.
"""
