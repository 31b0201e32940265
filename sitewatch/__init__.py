"""sitewatch — scoped periodic site crawler with keyword alerts."""
