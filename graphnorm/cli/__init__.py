"""
graphnorm CLI - developer tooling for the intermediate format

Commands:
- graphnorm inspect - Show the item tree stored in a serialized file
- graphnorm demo - Walk the bundled company graph through every stage
- graphnorm version - Show version information
"""
