"""
Test fixtures for Review Insight.

- reviews_sample.tsv: three usable reviews plus blank/whitespace rows
- reviews_no_text_column.tsv: TSV without the required text column
"""
