
class MapExporterError(Exception):
    """Base exception for all map_exporter errors"""
    pass

class ConfigError(MapExporterError):
    """Invalid or inconsistent global.json / dataset config"""
    pass

class DataUriError(MapExporterError, ValueError):
    """
    Data URI does not match data:<mime>;base64,<payload>
    missing delimiters, empty mime, bad base64, etc
    """
    pass

class DeliveryError(MapExporterError):
    """Sink could not hand the payload over (handle creation, write, move)"""
    pass
