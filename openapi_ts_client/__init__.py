from .generator import ApiClientGenerator, generate_client, save_project

__all__ = ["ApiClientGenerator", "generate_client", "save_project"]
