# Rurushi HLS Server control panel
