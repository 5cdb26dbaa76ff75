# Mortuary Records API
