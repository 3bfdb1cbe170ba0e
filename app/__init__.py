"""Page Insight: web page summarization and knowledge enrichment service"""
