"""Session analyzers, discovered automatically by the AnalyzerRegistry."""
