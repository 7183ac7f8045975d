"""Services used by the editor UI on top of the model"""
