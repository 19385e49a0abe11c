class ScriptedRng:
    """picks the first scripted coordinate that is still free"""

    def __init__(self, coords):
        self.coords = list(coords)

    def choice(self, seq):
        return next(c for c in self.coords if c in seq)
