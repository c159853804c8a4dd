from ampsparam.inputs.param_file import export_param_file

__all__ = ["export_param_file"]
