"""
Command plugins for the NHL Bot
Each module holds one BaseCommand subclass; PluginLoader discovers them.
"""
