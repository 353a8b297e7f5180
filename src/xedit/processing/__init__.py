"""Signal-processing building blocks: transforms, corrections and sub-spectrum handling."""
