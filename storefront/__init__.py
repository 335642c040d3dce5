# Marketplace storefront service
