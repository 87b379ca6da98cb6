"""Meeting domain - cancellation and completion"""
