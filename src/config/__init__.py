"""
Default YAML configuration files (loaded by managers.config_manager)
"""
