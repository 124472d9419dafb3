"""CrackIt: study-material quiz generator and sharing API."""
