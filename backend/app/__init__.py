"""Backend del auditor de cumplimiento de la cadena de suministro."""
