"""Core expression pipeline: tokenizer, parser, evaluator, and AST types."""
