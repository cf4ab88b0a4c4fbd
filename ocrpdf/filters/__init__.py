"""Text filter rules and their composition into line/document pipelines."""
