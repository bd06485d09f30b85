"""Skills deterministas del auditor de cadena de suministro."""
