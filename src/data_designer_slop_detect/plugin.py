from data_designer.plugins.plugin import Plugin, PluginType

slop_detect_plugin = Plugin(
    config_qualified_name="data_designer_slop_detect.config.SlopDetectColumnConfig",
    impl_qualified_name="data_designer_slop_detect.generator.SlopDetectColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
