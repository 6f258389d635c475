"""Live transport map: simulated fleet animation served to a map widget."""
