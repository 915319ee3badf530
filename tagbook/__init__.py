"""
TAGBOOK - image classification reporting

Turns the categories, classifications and uploaded images of an image-labeling
tool into a summary document and a compiled PDF report with per-category samples.

Architecture:
- Intake Context: Report request validation and read access to the label stores
- Aggregation Context: Counts, percentages and sample selection per category
- Templating Context: LaTeX document rendering and escaping
- Rendering Context: Isolated pdflatex compilation and artifact delivery
"""

__version__ = "0.1.0"
