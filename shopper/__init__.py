# Marketplace shopper-side cart engine
