"""Infrastructure implementations shared by bundlers and use-cases."""
